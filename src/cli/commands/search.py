"""Search and replace commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from cyclopts import Parameter, validators

from cli.config_loader import load_root_config
from cli.config_models import SearchDefaults
from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.groups import filter_group, match_group, output_group
from cli.output import render_hits, render_outcomes, write_json
from search.engine import replace, search
from search.models import ReplaceRequest, SearchRequest


@dataclass(frozen=True)
class SearchFlags:
    """Options shared by ``search`` and ``replace``.

    Unset options fall back to the configured search defaults.
    """

    exclude: Annotated[
        list[str] | None,
        Parameter(
            name="--exclude",
            help="Name or glob to exclude anywhere in the tree (repeatable).",
            group=filter_group,
        ),
    ] = None
    include: Annotated[
        list[str] | None,
        Parameter(
            name="--include",
            help="Only search files whose path matches this glob (repeatable).",
            group=filter_group,
        ),
    ] = None
    max_file_size: Annotated[
        int | None,
        Parameter(
            name="--max-file-size",
            help="Skip files larger than this many bytes.",
            validator=validators.Number(gte=0),
            group=filter_group,
        ),
    ] = None
    extra_path: Annotated[
        list[str] | None,
        Parameter(
            name="--extra-path",
            help="Additional file to search even if outside the root or filtered out.",
            group=filter_group,
        ),
    ] = None
    case_sensitive: Annotated[
        bool | None,
        Parameter(name=["--case-sensitive", "-c"], help="Match case exactly.", group=match_group),
    ] = None
    whole_word: Annotated[
        bool | None,
        Parameter(name=["--whole-word", "-w"], help="Match whole words only.", group=match_group),
    ] = None
    regex: Annotated[
        bool | None,
        Parameter(
            name=["--regex", "-e"],
            help="Treat the query as a regular expression.",
            group=match_group,
        ),
    ] = None
    json: Annotated[
        bool,
        Parameter(name="--json", help="Print results as JSON.", group=output_group),
    ] = False


_DEFAULT_FLAGS = SearchFlags()


def build_search_request(
    query: str,
    root: str,
    flags: SearchFlags,
    defaults: SearchDefaults,
) -> SearchRequest:
    """Merge CLI flags over configured defaults into a request.

    Returns
    -------
    SearchRequest
        Request for the engine.
    """
    return SearchRequest(
        query=query,
        root_path=root,
        excludes=tuple(flags.exclude if flags.exclude is not None else defaults.excludes),
        includes=tuple(flags.include if flags.include is not None else defaults.includes),
        max_file_size=(
            flags.max_file_size if flags.max_file_size is not None else defaults.max_file_size
        ),
        case_sensitive=_pick(flags.case_sensitive, defaults.case_sensitive),
        whole_word=_pick(flags.whole_word, defaults.whole_word),
        is_regex=_pick(flags.regex, defaults.is_regex),
        extra_paths=tuple(flags.extra_path or ()),
    )


def search_command(
    query: str,
    root: str = ".",
    flags: Annotated[SearchFlags, Parameter(name="*")] = _DEFAULT_FLAGS,
    *,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> int:
    """Search every file under ROOT for QUERY.

    Parameters
    ----------
    query
        Text or pattern to look for.
    root
        Project root to walk; pass an empty string to search only --extra-path files.

    Returns
    -------
    int
        Exit status code.
    """
    request = build_search_request(query, root, flags, _defaults(run_context))
    hits = search(request)
    if flags.json:
        write_json(hits)
    else:
        render_hits(hits)
    return ExitCode.SUCCESS


def replace_command(
    query: str,
    replacement: str,
    root: str = ".",
    flags: Annotated[SearchFlags, Parameter(name="*")] = _DEFAULT_FLAGS,
    *,
    apply: Annotated[
        bool,
        Parameter(name="--apply", help="Write changes instead of previewing them."),
    ] = False,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> int:
    """Preview (default) or apply replacing QUERY with REPLACEMENT under ROOT.

    Parameters
    ----------
    query
        Text or pattern to replace.
    replacement
        Replacement text; $1 / ${name} insert capture groups in --regex mode.
    root
        Project root to walk.

    Returns
    -------
    int
        Exit status code.
    """
    base = build_search_request(query, root, flags, _defaults(run_context))
    request = ReplaceRequest(
        query=base.query,
        root_path=base.root_path,
        excludes=base.excludes,
        includes=base.includes,
        max_file_size=base.max_file_size,
        case_sensitive=base.case_sensitive,
        whole_word=base.whole_word,
        is_regex=base.is_regex,
        extra_paths=base.extra_paths,
        replacement=replacement,
        dry_run=not apply,
    )
    outcomes = replace(request)
    if flags.json:
        write_json(outcomes)
    else:
        render_outcomes(outcomes, dry_run=request.dry_run)
    return ExitCode.SUCCESS


def _pick(value: bool | None, default: bool) -> bool:
    return default if value is None else value


def _defaults(run_context: RunContext | None) -> SearchDefaults:
    if run_context is None:
        config, _location = load_root_config(None)
        return config.search
    return run_context.config.search


__all__ = ["SearchFlags", "build_search_request", "replace_command", "search_command"]
