#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Run one query from start to finish.

:func:`run_query` is the single error boundary of a run. Everything between
reading the hive and exporting a value happens inside it, and every failure
is turned into a log message rather than an exception or an exit status.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from rich.console import Console

from regquery import __version__
from regquery.cli.timing import TimingContext
from regquery.constants import NOTHING_TO_DO_MESSAGE
from regquery.exceptions import HiveNotFoundError, NotFoundError, ValidationError
from regquery.hive import HiveStore, open_hive_store
from regquery.query.criteria import QueryArguments, SearchCriteria, SingleKey, SingleValue, select_mode
from regquery.query.executor import execute_query, lookup_key, lookup_value
from regquery.query.export import export_value
from regquery.query.highlight import build_highlight_config
from regquery.query.predicate import build_predicate
from regquery.query.render import OutputRenderer
from regquery.query.results import sort_hits, summary_line

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0

StoreFactory = Callable[..., HiveStore]


def run_query(
    args: QueryArguments,
    console: Console,
    store_factory: Optional[StoreFactory] = None,
    highlight_foreground: Optional[str] = None,
    highlight_background: Optional[str] = None,
) -> int:
    """Parse the hive, run the selected query and print the results.

    Parameters
    ----------
    args : QueryArguments
        Parsed command-line inputs
    console : rich.console.Console
        Destination for results
    store_factory : callable, optional
        Called as ``store_factory(hive_path, recover_deleted=...)`` to create the hive store,
        defaults to :func:`~regquery.hive.open_hive_store`
    highlight_foreground : str, optional
        Text color of highlighted search terms
    highlight_background : str, optional
        Background color of highlighted search terms

    Returns
    -------
    int
        Always ``EXIT_SUCCESS``; problems are reported through logging

    """
    logger.info(f"regquery version {__version__}")
    logger.info(f"Processing hive '{args.hive}'")

    if not Path(args.hive).is_file():
        logger.warning(HiveNotFoundError(args.hive).message)
        return EXIT_SUCCESS

    renderer = OutputRenderer(console)
    timer = TimingContext("Hive search", logger)

    try:
        with timer:
            store = (store_factory or open_hive_store)(args.hive, recover_deleted=args.recover)
            store.parse()

            criteria = select_mode(args)
            if criteria is None:
                logger.warning(NOTHING_TO_DO_MESSAGE)
            elif isinstance(criteria, SingleValue):
                _show_value(store, criteria, args, renderer, timer)
            elif isinstance(criteria, SingleKey):
                _show_key(store, criteria, renderer, timer)
            else:
                _search(store, criteria, args, renderer, timer, highlight_foreground, highlight_background)
    except ValidationError as e:
        logger.error(e.message)
    except NotFoundError as e:
        logger.warning(e.message)
        renderer.elapsed(timer.elapsed)
    except Exception as e:
        logger.error(f"There was an error: {e}")
        logger.debug("Query failed", exc_info=True)

    return EXIT_SUCCESS


def _show_value(
    store: HiveStore, criteria: SingleValue, args: QueryArguments, renderer: OutputRenderer, timer: TimingContext
) -> None:
    key = lookup_key(store, criteria.key_path)
    value = lookup_value(key, criteria.key_path, criteria.value_name)
    elapsed = timer.stop()

    renderer.value_detail(value)
    if args.save_to_name:
        export_value(value, args.save_to_name)
    renderer.elapsed(elapsed)


def _show_key(store: HiveStore, criteria: SingleKey, renderer: OutputRenderer, timer: TimingContext) -> None:
    key = lookup_key(store, criteria.key_path)
    elapsed = timer.stop()

    renderer.root_key(store.root)
    renderer.key_listing(key, recursive=criteria.recursive)
    renderer.elapsed(elapsed)


def _search(
    store: HiveStore,
    criteria: SearchCriteria,
    args: QueryArguments,
    renderer: OutputRenderer,
    timer: TimingContext,
    highlight_foreground: Optional[str],
    highlight_background: Optional[str],
) -> None:
    predicate = build_predicate(criteria)
    hits = execute_query(store, criteria, predicate)
    elapsed = timer.stop()

    if args.sort:
        hits = sort_hits(hits, criteria)

    renderer.highlight = build_highlight_config(predicate, highlight_foreground, highlight_background)
    renderer.root_key(store.root)
    renderer.hits(hits, criteria, suppress_data=args.suppress_data)
    renderer.summary(summary_line(criteria, len(hits)))
    renderer.elapsed(elapsed)
