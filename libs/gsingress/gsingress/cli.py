"""
CLI tool for gsingress.

Generates Kubernetes Ingress manifests from Agones GameServer manifests.
"""

import argparse
import logging
import sys
from typing import List, Optional

import yaml

from .errors import IngressOptionError
from .generators import generate_all_manifests
from .options import parse_bool
from .parser import load_gameservers
from .types import (
    ANNOTATION_INGRESS_DOMAIN,
    ANNOTATION_INGRESS_FQDN,
    ANNOTATION_TERMINATE_TLS,
    RoutingMode,
    get_ingress_routing_mode,
    has_annotation,
)

logger = logging.getLogger(__name__)


def cmd_generate(args: argparse.Namespace) -> None:
    """Generate ingress manifests."""
    try:
        gameservers = load_gameservers(args.file)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if not gameservers:
        print(f"No GameServers defined in {args.file}")
        sys.exit(0)

    try:
        manifests = generate_all_manifests(
            gameservers=gameservers,
            output_dir=None if args.stdout else args.output,
            issuer_name=args.issuer_name,
            mode=args.mode,
            ingress_class_name=args.ingress_class,
            ready_only=args.ready_only,
        )
    except IngressOptionError as e:
        logger.error(f"Failed to build ingress for {e.gameserver}: {e}")
        sys.exit(1)

    if args.stdout and manifests:
        print(yaml.dump_all(manifests, default_flow_style=False), end="")


def cmd_inspect(args: argparse.Namespace) -> None:
    """Show how each GameServer would be routed."""
    try:
        gameservers = load_gameservers(args.file)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if not gameservers:
        print("No GameServers defined")
        return

    print("GameServers:")
    print("-" * 60)
    for gs in gameservers:
        mode = get_ingress_routing_mode(gs)
        if mode == RoutingMode.PATH:
            fqdn, ok = has_annotation(gs, ANNOTATION_INGRESS_FQDN)
            target = f"{fqdn}/{gs.name}" if ok else "(missing fqdn)"
        else:
            domain, ok = has_annotation(gs, ANNOTATION_INGRESS_DOMAIN)
            target = f"{gs.name}.{domain}/" if ok else "(missing domain)"
        terminate, _ = has_annotation(gs, ANNOTATION_TERMINATE_TLS)
        state = gs.state.value if gs.state else "Unknown"
        try:
            tls_info = " [terminate-tls]" if terminate and parse_bool(terminate) else ""
        except ValueError:
            tls_info = " [invalid terminate-tls]"
        print(f"  {gs.namespace}/{gs.name} ({state}) {mode.value}: {target}{tls_info}")

    print(f"\nTotal: {len(gameservers)} gameservers")


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="gsingress CLI - Generate Ingress manifests from Agones GameServer manifests"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate ingress manifests")
    gen_parser.add_argument(
        "--file", "-f",
        required=True,
        help="YAML file with GameServer manifests"
    )
    gen_parser.add_argument(
        "--output", "-o",
        default="./generated/ingress",
        help="Output directory for manifests"
    )
    gen_parser.add_argument(
        "--issuer-name",
        default=None,
        help="cert-manager issuer name (default: from the GameServer annotation)"
    )
    gen_parser.add_argument(
        "--mode", "-m",
        default=None,
        choices=[m.value for m in RoutingMode],
        help="Routing mode (default: from the GameServer annotation)"
    )
    gen_parser.add_argument(
        "--ingress-class",
        default=None,
        help="ingressClassName for generated Ingresses"
    )
    gen_parser.add_argument(
        "--ready-only",
        action="store_true",
        help="Only expose GameServers in the Ready state"
    )
    gen_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print manifests instead of writing them"
    )

    # Inspect command
    inspect_parser = subparsers.add_parser("inspect", help="Show GameServer routing")
    inspect_parser.add_argument(
        "--file", "-f",
        required=True,
        help="YAML file with GameServer manifests"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if args.command == "generate":
        cmd_generate(args)
    elif args.command == "inspect":
        cmd_inspect(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
