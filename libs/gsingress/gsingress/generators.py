"""
Ingress manifest generators for gsingress.

Builds one Ingress per GameServer by running the standard option pipeline.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .options import (
    IngressOption,
    apply_options,
    with_custom_annotations,
    with_ingress_rule,
    with_tls,
    with_tls_cert_issuer,
)
from .types import (
    GAMESERVER_NAME_LABEL,
    GameServer,
    Ingress,
    RoutingMode,
    get_ingress_routing_mode,
    get_tls_cert_issuer,
    is_ready,
)

logger = logging.getLogger(__name__)


def new_ingress(gs: GameServer, ingress_class_name: Optional[str] = None) -> Ingress:
    """
    Create an empty Ingress owned by the GameServer.

    Args:
        gs: Source GameServer
        ingress_class_name: Optional ingressClassName for the spec

    Returns:
        Ingress with metadata set and no rules or TLS
    """
    owner_references: List[Dict[str, Any]] = []
    if gs.uid:
        owner_references.append({
            "apiVersion": "agones.dev/v1",
            "kind": "GameServer",
            "name": gs.name,
            "uid": gs.uid,
            "controller": True,
            "blockOwnerDeletion": True,
        })

    return Ingress(
        name=gs.name,
        namespace=gs.namespace,
        labels={GAMESERVER_NAME_LABEL: gs.name},
        owner_references=owner_references,
        ingress_class_name=ingress_class_name,
    )


def default_options(mode: Union[RoutingMode, str], issuer_name: str) -> List[IngressOption]:
    """The standard option pipeline for a routing mode and issuer."""
    return [
        with_custom_annotations(),
        with_ingress_rule(mode),
        with_tls(mode),
        with_tls_cert_issuer(issuer_name),
    ]


def build_ingress(
    gs: GameServer,
    issuer_name: Optional[str] = None,
    mode: Optional[Union[RoutingMode, str]] = None,
    ingress_class_name: Optional[str] = None,
) -> Ingress:
    """
    Build the Ingress for a GameServer.

    Args:
        gs: Source GameServer
        issuer_name: cert-manager issuer (default: the GameServer's issuer annotation)
        mode: Routing mode (default: the GameServer's ingress-mode annotation)
        ingress_class_name: Optional ingressClassName

    Returns:
        Populated Ingress

    Raises:
        IngressOptionError: If the GameServer's annotations are incomplete or malformed
    """
    if mode is None:
        mode = get_ingress_routing_mode(gs)
    if issuer_name is None:
        issuer_name = get_tls_cert_issuer(gs)

    logger.debug(f"Building ingress for {gs.namespace}/{gs.name} (mode: {getattr(mode, 'value', mode)})")

    ingress = new_ingress(gs, ingress_class_name)
    return apply_options(gs, ingress, *default_options(mode, issuer_name))


def generate_ingress_manifest(
    gs: GameServer,
    issuer_name: Optional[str] = None,
    mode: Optional[Union[RoutingMode, str]] = None,
    ingress_class_name: Optional[str] = None,
) -> Dict[str, Any]:
    """Build the Ingress for a GameServer and render it as a manifest dict."""
    return build_ingress(gs, issuer_name, mode, ingress_class_name).to_dict()


def generate_all_manifests(
    gameservers: List[GameServer],
    output_dir: Optional[str] = None,
    issuer_name: Optional[str] = None,
    mode: Optional[Union[RoutingMode, str]] = None,
    ingress_class_name: Optional[str] = None,
    ready_only: bool = False,
) -> List[Dict[str, Any]]:
    """
    Generate Ingress manifests for GameServers and write them to output directory.

    Args:
        gameservers: GameServers to expose
        output_dir: Output directory for manifests (nothing is written when None;
            an empty result still overwrites the previous file)
        issuer_name: cert-manager issuer applied to every GameServer
        mode: Routing mode applied to every GameServer
        ingress_class_name: Optional ingressClassName
        ready_only: Skip GameServers that are not Ready

    Returns:
        List of Ingress manifest dicts

    Raises:
        IngressOptionError: On the first GameServer that cannot be exposed
    """
    manifests: List[Dict[str, Any]] = []

    for gs in gameservers:
        if ready_only and not is_ready(gs):
            logger.info(f"Skipping {gs.namespace}/{gs.name}: not Ready")
            continue
        manifests.append(generate_ingress_manifest(gs, issuer_name, mode, ingress_class_name))

    logger.info(f"Generated {len(manifests)} ingress manifests")

    if output_dir is not None:
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)
        manifest_file = output_path / "ingress-manifests.yaml"
        manifest_file.write_text(yaml.dump_all(manifests, default_flow_style=False))
        logger.info(f"Wrote manifests to {manifest_file}")

    return manifests
