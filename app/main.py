#!/usr/bin/env python3
"""
kubestate - Entry Point

Loads the saved configuration, reconciles it with command-line overrides
and the kubeconfig, and reports the active context and namespace.
"""

import argparse
import sys
from pathlib import Path

# Add app directory to path for imports when running directly
APP_DIR = Path(__file__).parent
if str(APP_DIR) not in sys.path:
    sys.path.insert(0, str(APP_DIR))

from kubestate import __version__
from kubestate.client import KubeconfigConnection, KubeconfigError, KubeSettings
from kubestate.config import Config, ConfigError, Flags, app_config_file
from kubestate.utils import get_logger, setup_logging

logger = get_logger("kubestate")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Persistent context and namespace state for Kubernetes clients",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show the active context and namespace
  python main.py

  # Switch namespace and remember it
  python main.py -n kube-system --save

  # Look at every namespace of another context
  python main.py --context prod -A
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"kubestate {__version__}",
    )
    parser.add_argument(
        "--config-dir",
        type=str,
        help="Configuration directory (default: $KUBESTATE_CONFIG_DIR or ~/.config/kubestate)",
    )
    parser.add_argument(
        "--kubeconfig",
        type=str,
        help="Path to the kubeconfig file",
    )
    parser.add_argument(
        "--context",
        type=str,
        help="Context to activate (overrides kubeconfig current-context)",
    )
    parser.add_argument(
        "-n",
        "--namespace",
        type=str,
        help="Namespace to activate (overrides saved namespace)",
    )
    parser.add_argument(
        "-A",
        "--all-namespaces",
        action="store_true",
        default=None,
        help="Activate all namespaces",
    )
    parser.add_argument(
        "-c",
        "--command",
        type=str,
        help="View to open on startup (overrides saved view once)",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Persist the reconciled state",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="warning",
        help="Logging level",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Also write logs to this file",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    config_path = app_config_file(args.config_dir)
    config = Config(
        settings=KubeSettings(),
        manual_command=args.command,
        home=args.config_dir,
    )

    # Load configuration
    if config_path.exists():
        try:
            config.load(config_path)
        except (ConfigError, OSError) as e:
            print(f"Error loading configuration: {e}", file=sys.stderr)
            return 1
    else:
        logger.info(f"No configuration at {config_path}, using defaults")

    config.set_connection(KubeconfigConnection(args.kubeconfig, context=args.context))

    flags = Flags(
        context=args.context,
        namespace=args.namespace,
        all_namespaces=args.all_namespaces,
    )
    try:
        session = config.reconcile(flags)
    except (ConfigError, KubeconfigError, OSError) as e:
        print(f"Error resolving context: {e}", file=sys.stderr)
        return 1

    config.dump("Reconciled")
    print(f"context:   {session.context}")
    print(f"cluster:   {config.current_context().cluster_name}")
    print(f"namespace: {session.namespace}")
    print(f"view:      {config.active_view()}")
    print(f"favorites: {', '.join(config.fav_namespaces())}")

    if args.save:
        try:
            config.save(config_path)
        except (ConfigError, OSError) as e:
            print(f"Error saving configuration: {e}", file=sys.stderr)
            return 1
        print(f"Saved {config_path}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
