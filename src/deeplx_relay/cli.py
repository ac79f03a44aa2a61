"""
Command-line interface for DeepLX Relay.

Provides CLI commands for running and exercising the relay:
- run: Start the HTTP relay server
- translate: Translate one text through the backend and print the outcome
- show-config: Print the effective configuration (secrets shown as set/unset)

Usage:
    deeplx-relay run [--host HOST] [--port PORT] [--token TOKEN]
                     [--dl-session SESSION] [--proxy URL]
    deeplx-relay translate TEXT --target-lang ZH [--source-lang EN]
    deeplx-relay show-config

Environment Variables:
    IP / PORT: Listen address (default: 0.0.0.0:1188)
    TOKEN: Access token required by the translate routes
    DL_SESSION: Pro session used by /v1/translate when no cookie is sent
    PROXY: Outbound proxy URL for backend calls
"""

import argparse
import json
import logging
import sys

from deeplx_relay.config import RelayConfig, load_config, print_config_summary
from deeplx_relay.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def apply_overrides(cfg: RelayConfig, args: argparse.Namespace) -> RelayConfig:
    """
    Apply CLI flag overrides on top of the loaded configuration.

    Only flags that were actually given replace config values; the rest keep
    whatever the INI file and environment provided.
    """
    if getattr(args, "host", None):
        cfg.server.host = args.host
    if getattr(args, "port", None):
        cfg.server.port = args.port
    if getattr(args, "token", None):
        cfg.security.token = args.token
    if getattr(args, "dl_session", None):
        cfg.backend.dl_session = args.dl_session
    if getattr(args, "proxy", None):
        cfg.backend.proxy = args.proxy
    if getattr(args, "log_level", None):
        cfg.logging.level = args.log_level.upper()
    return cfg


def log_startup_banner(cfg: RelayConfig) -> None:
    """Log where the relay listens and which optional features are on."""
    logger.info(
        "DeepLX Relay starting. Listening on %s:%d", cfg.server.host, cfg.server.port
    )
    if cfg.auth_enabled:
        logger.info("Access token is set.")
    if cfg.backend.proxy:
        logger.info("Proxy is set to %s", cfg.backend.proxy)
    if cfg.backend.dl_session:
        logger.info("Default dl_session is set for /v1/translate.")


def cmd_run(args: argparse.Namespace) -> int:
    """
    Run the relay server in the foreground.

    Returns:
        0 on clean shutdown (Ctrl+C), 1 on startup error
    """
    from deeplx_relay.api.server import start_server

    cfg = apply_overrides(load_config(), args)
    configure_logging(cfg.logging)
    log_startup_banner(cfg)

    try:
        start_server(cfg, auto_discover=not getattr(args, "no_auto_port", False))
        return 0
    except KeyboardInterrupt:
        print("\nServer stopped.")
        return 0
    except Exception as e:
        print(f"Error starting server: {e}", file=sys.stderr)
        return 1


def cmd_translate(args: argparse.Namespace) -> int:
    """
    Translate a single text and print the outcome as JSON.

    Uses the same orchestrator as the HTTP routes, so the output matches what
    ``/translate`` (or ``/v1/translate`` with ``--dl-session``) would return.
    A dotted session is refused with the 401 outcome before any backend call.

    Returns:
        0 when the backend produced a translation, 1 otherwise
    """
    from deeplx_relay.translation.models import TranslationOutcome
    from deeplx_relay.translation.service import (
        RelayOrchestrator,
        is_valid_tag_handling,
        pro_session_error,
    )

    cfg = apply_overrides(load_config(), args)
    configure_logging(cfg.logging)

    if not is_valid_tag_handling(args.tag_handling):
        print("Error: --tag-handling must be 'html' or 'xml'.", file=sys.stderr)
        return 1

    # A given session must pass the same checks as /v1/translate.
    if args.dl_session and (message := pro_session_error(args.dl_session)):
        outcome = TranslationOutcome.failure(401, message, target_lang=args.target_lang)
        print(json.dumps(outcome.to_response(), ensure_ascii=False, indent=2))
        return 1

    orchestrator = RelayOrchestrator.from_config(cfg)
    outcome = orchestrator.translate(
        args.source_lang,
        args.target_lang,
        args.text,
        args.tag_handling,
        args.dl_session or "",
    )
    print(json.dumps(outcome.to_response(), ensure_ascii=False, indent=2))
    return 0 if outcome.ok else 1


def cmd_show_config(args: argparse.Namespace) -> int:
    """Print the effective configuration summary."""
    print_config_summary(apply_overrides(load_config(), args))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="deeplx-relay",
        description="DeepLX Relay - free/pro translation relay for the DeepL web backend",
    )
    parser.add_argument("--log-level", type=str, help="Override the log level (e.g. DEBUG)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run command
    run_parser = subparsers.add_parser(
        "run",
        help="Run the relay server",
        description=(
            "Start the HTTP relay. If the port is in use, automatically finds an "
            "available port in the next 100."
        ),
    )
    run_parser.add_argument("--host", type=str, help="Host to bind (default: 0.0.0.0, or IP)")
    run_parser.add_argument(
        "--port", "-p", type=int, help="Port to listen on (default: 1188, or PORT)"
    )
    run_parser.add_argument("--token", type=str, help="Access token (default: TOKEN env var)")
    run_parser.add_argument(
        "--dl-session", type=str, help="Default Pro session (default: DL_SESSION env var)"
    )
    run_parser.add_argument("--proxy", type=str, help="Outbound proxy URL (default: PROXY)")
    run_parser.add_argument(
        "--no-auto-port",
        action="store_true",
        help="Fail instead of picking another port when the port is busy",
    )
    run_parser.set_defaults(func=cmd_run)

    # translate command
    translate_parser = subparsers.add_parser(
        "translate",
        help="Translate one text and print the result",
        description="Send a single translation through the backend and print the JSON outcome.",
    )
    translate_parser.add_argument("text", type=str, help="Text to translate")
    translate_parser.add_argument(
        "--target-lang", "-t", type=str, required=True, help="Target language (e.g. ZH)"
    )
    translate_parser.add_argument(
        "--source-lang", "-s", type=str, default="", help="Source language (default: auto)"
    )
    translate_parser.add_argument(
        "--tag-handling", type=str, default="", help="Tag handling: html or xml"
    )
    translate_parser.add_argument(
        "--dl-session", type=str, help="Pro session to use for this call"
    )
    translate_parser.add_argument("--proxy", type=str, help="Outbound proxy URL")
    translate_parser.set_defaults(func=cmd_translate)

    # show-config command
    show_parser = subparsers.add_parser(
        "show-config",
        help="Print the effective configuration",
        description="Print configuration sources and values. Secrets are shown as set/unset.",
    )
    show_parser.set_defaults(func=cmd_show_config)

    return parser


def main() -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
