"""
Manifest parser for gsingress.

Loads GameServer manifests from YAML files.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .types import GameServer

logger = logging.getLogger(__name__)


def load_manifests(path: str) -> List[Dict[str, Any]]:
    """
    Load every Kubernetes object from a YAML file.

    Multi-document files are supported, empty documents are skipped and
    `kind: List` documents are expanded into their items.

    Args:
        path: Path to the YAML file

    Returns:
        List of manifest dicts

    Raises:
        FileNotFoundError: If the file does not exist
    """
    manifest_path = Path(path)
    if not manifest_path.exists():
        raise FileNotFoundError(f"Manifest file not found: {path}")

    manifests: List[Dict[str, Any]] = []
    with open(manifest_path) as f:
        for doc in yaml.safe_load_all(f):
            if not isinstance(doc, dict):
                continue
            if str(doc.get("kind", "")).endswith("List"):
                manifests.extend(item for item in doc.get("items") or [] if isinstance(item, dict))
            else:
                manifests.append(doc)

    logger.debug(f"Loaded {len(manifests)} manifests from {path}")
    return manifests


def load_gameservers(path: str) -> List[GameServer]:
    """
    Load the GameServer objects from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed GameServers, in file order
    """
    gameservers = [
        GameServer.from_dict(m)
        for m in load_manifests(path)
        if m.get("kind") == "GameServer"
    ]
    if not gameservers:
        logger.warning(f"No GameServer manifests found in {path}")
    return gameservers
