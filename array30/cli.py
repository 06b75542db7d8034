#!/usr/bin/env python3
"""
Array30 CLI entry point: load settings and tables, start a front-end.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import traceback

from array30 import __version__
from array30.log import setup_logging

logger = logging.getLogger('array30.cli')


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='array30',
        description='行列 30 輸入法 - Array30 input method',
    )
    parser.add_argument(
        '--big', '-b',
        action='store_true',
        help='Use the big character set table (default: regular)',
    )
    frontend = parser.add_mutually_exclusive_group()
    frontend.add_argument(
        '--console', '-c',
        dest='mode', action='store_const', const='console',
        help='Run the terminal front-end (default)',
    )
    frontend.add_argument(
        '--gui', '-g',
        dest='mode', action='store_const', const='gui',
        help='Run the window front-end (needs PyQt5)',
    )
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to config file (default: ~/.config/array30/config.json)',
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode with verbose logging',
    )
    parser.add_argument(
        '--logfile',
        type=str,
        default=None,
        help='Path to log file (default: ~/.array30.log)',
    )
    parser.add_argument(
        '--version',
        action='version',
        version='%(prog)s ' + __version__,
    )
    parser.set_defaults(mode='console')
    return parser.parse_args(argv)


def load_dictionary(config: dict):
    """Load both tables named by *config*. Raises DictionaryUnavailableError."""
    from array30.config import resolve_table_paths
    from array30.dictionary import Dictionary

    char_file, phrase_file = resolve_table_paths(config)
    logger.info("Loading phrase table: %s", phrase_file)
    logger.info("Loading char table: %s", char_file)
    dictionary = Dictionary.from_files(char_file, phrase_file)
    char_count, phrase_count = dictionary.stats()
    logger.info("Loaded %d char codes, %d phrase codes", char_count, phrase_count)
    return dictionary


def main(argv: list[str] | None = None) -> int:
    """Main entry point for Array30"""
    args = parse_args(argv)

    from array30.config import ConfigManager, load_config, resolve_table_paths
    from array30.core.engine import InputEngine
    from array30.dictionary import DictionaryUnavailableError

    config = load_config(args.config)
    debug = args.debug or config['debug']
    # stderr output would tear the curses screen
    log = setup_logging(debug=debug, log_file=args.logfile, console=args.mode != 'console')

    log.info(f"{'=' * 60}")
    log.info(f"Array30 started (version {__version__}, pid {os.getpid()})")
    log.info(f"Front-end: {args.mode}, debug: {debug}")

    if args.big:
        config['use_big_char'] = True

    try:
        dictionary = load_dictionary(config)
    except DictionaryUnavailableError as e:
        log.error(f"Dictionary unavailable: {e}")
        print(f"無法載入字表：{e.path}", file=sys.stderr)
        print("請確保檔案存在，或以 --config 指定 table_dir", file=sys.stderr)
        return 1

    engine = InputEngine(dictionary)

    try:
        if args.mode == 'gui':
            try:
                from array30.ui.window import run_gui
            except ImportError as e:
                log.error(f"Window front-end unavailable: {e}")
                print("視窗模式需要 PyQt5：pip install array30[gui]", file=sys.stderr)
                return 1
            return run_gui(engine, ConfigManager(args.config), resolve_table_paths(config))

        from array30.ui.console import run_console
        run_console(engine, sync_clipboard=config['sync_clipboard'])
        return 0

    except KeyboardInterrupt:
        log.info("Terminated by user (Ctrl+C)")
        return 0

    except Exception as e:
        log.error(f"Unhandled error: {type(e).__name__}: {e}")
        log.debug(traceback.format_exc())
        return 1

    finally:
        log.info("Array30 shutdown")
        log.info(f"{'=' * 60}")


if __name__ == '__main__':
    sys.exit(main())
