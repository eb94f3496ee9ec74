"""
Type definitions for gsingress.

These dataclasses represent the Agones GameServer fields the ingress pipeline
reads and the networking.k8s.io/v1 Ingress fields it writes.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


ANNOTATION_INGRESS_MODE = "octops.io/gameserver-ingress-mode"
ANNOTATION_INGRESS_DOMAIN = "octops.io/gameserver-ingress-domain"
ANNOTATION_INGRESS_FQDN = "octops.io/gameserver-ingress-fqdn"
ANNOTATION_SECRET_NAME = "octops.io/secret-name"
ANNOTATION_TERMINATE_TLS = "octops.io/terminate-tls"
ANNOTATION_ISSUER_NAME = "octops.io/issuer-tls-name"
ANNOTATION_CUSTOM_PREFIX = "octops-"

CERT_MANAGER_ANNOTATION_ISSUER = "cert-manager.io/issuer"
GAMESERVER_NAME_LABEL = "agones.dev/gameserver"

DEFAULT_PATH_TYPE = "Prefix"


class RoutingMode(str, Enum):
    """How external traffic is routed to a game server."""
    DOMAIN = "domain"
    PATH = "path"

    @classmethod
    def resolve(cls, value: Optional[str]) -> "RoutingMode":
        """Normalize a raw mode string. Unknown or missing values are DOMAIN."""
        if isinstance(value, cls):
            return value
        for mode in cls:
            if mode.value == value:
                return mode
        return cls.DOMAIN


class GameServerState(str, Enum):
    """Agones GameServer lifecycle state."""
    PORT_ALLOCATION = "PortAllocation"
    CREATING = "Creating"
    STARTING = "Starting"
    SCHEDULED = "Scheduled"
    REQUEST_READY = "RequestReady"
    READY = "Ready"
    SHUTDOWN = "Shutdown"
    ERROR = "Error"
    UNHEALTHY = "Unhealthy"
    RESERVED = "Reserved"
    ALLOCATED = "Allocated"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["GameServerState"]:
        for state in cls:
            if state.value == value:
                return state
        return None


@dataclass
class GameServerPort:
    """An allocated port from GameServer status."""
    name: str = ""
    port: int = 0

    @classmethod
    def from_dict(cls, data: Dict) -> "GameServerPort":
        return cls(
            name=data.get("name", ""),
            port=int(data.get("port", 0) or 0),
        )


@dataclass
class GameServer:
    """Read-only view of an Agones GameServer."""
    name: str
    namespace: str = "default"
    uid: str = ""
    annotations: Dict[str, str] = field(default_factory=dict)
    labels: Dict[str, str] = field(default_factory=dict)
    ports: List[GameServerPort] = field(default_factory=list)
    container_ports: List[int] = field(default_factory=list)
    state: Optional[GameServerState] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameServer":
        """Parse a GameServer manifest (as loaded from YAML or the API)."""
        metadata = data.get("metadata") or {}
        spec = data.get("spec") or {}
        status = data.get("status") or {}

        container_ports = []
        for port in spec.get("ports") or []:
            container_ports.append(int(port.get("containerPort", 0) or 0))

        return cls(
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace") or "default",
            uid=metadata.get("uid", ""),
            annotations={
                str(k): "" if v is None else str(v)
                for k, v in (metadata.get("annotations") or {}).items()
            },
            labels=dict(metadata.get("labels") or {}),
            ports=[GameServerPort.from_dict(p) for p in status.get("ports") or []],
            container_ports=container_ports,
            state=GameServerState.parse(status.get("state")),
        )


def from_object(obj: Any) -> GameServer:
    """Coerce obj to a GameServer. Anything unrecognized yields an empty one."""
    if isinstance(obj, GameServer):
        return obj
    if isinstance(obj, dict):
        return GameServer.from_dict(obj)
    return GameServer(name="")


def has_annotation(gs: GameServer, annotation: str) -> Tuple[str, bool]:
    """Look up an annotation, returning (value, present)."""
    if annotation in gs.annotations:
        return gs.annotations[annotation], True
    return "", False


def get_game_server_port(gs: GameServer) -> GameServerPort:
    """First allocated port, or a zero port when none are declared."""
    if gs.ports:
        return gs.ports[0]
    return GameServerPort()


def get_game_server_container_port(gs: GameServer) -> int:
    if gs.container_ports:
        return gs.container_ports[0]
    return 0


def is_ready(gs: Optional[GameServer]) -> bool:
    if gs is None:
        return False
    return gs.state == GameServerState.READY


def get_ingress_routing_mode(gs: GameServer) -> RoutingMode:
    """Routing mode requested by the GameServer, defaulting to domain."""
    mode, ok = has_annotation(gs, ANNOTATION_INGRESS_MODE)
    if ok:
        return RoutingMode.resolve(mode)
    return RoutingMode.DOMAIN


def get_tls_cert_issuer(gs: GameServer) -> str:
    issuer, ok = has_annotation(gs, ANNOTATION_ISSUER_NAME)
    if ok:
        return issuer
    return ""


@dataclass
class IngressTLS:
    """A single TLS entry of an Ingress spec."""
    hosts: List[str] = field(default_factory=list)
    secret_name: str = ""

    @classmethod
    def from_dict(cls, data: Dict) -> "IngressTLS":
        return cls(
            hosts=list(data.get("hosts") or []),
            secret_name=data.get("secretName", ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hosts": list(self.hosts),
            "secretName": self.secret_name,
        }


@dataclass
class IngressRule:
    """A host rule with a single HTTP path pointing at a service backend."""
    host: str
    path: str
    service_name: str
    port: int = 0
    path_type: str = DEFAULT_PATH_TYPE

    @classmethod
    def from_dict(cls, data: Dict) -> "IngressRule":
        paths = (data.get("http") or {}).get("paths") or [{}]
        first = paths[0]
        service = (first.get("backend") or {}).get("service") or {}
        return cls(
            host=data.get("host", ""),
            path=first.get("path", "/"),
            service_name=service.get("name", ""),
            port=int((service.get("port") or {}).get("number", 0) or 0),
            path_type=first.get("pathType", DEFAULT_PATH_TYPE),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "host": self.host,
            "http": {
                "paths": [
                    {
                        "path": self.path,
                        "pathType": self.path_type,
                        "backend": {
                            "service": {
                                "name": self.service_name,
                                "port": {"number": self.port},
                            },
                        },
                    }
                ],
            },
        }


@dataclass
class Ingress:
    """Mutable networking.k8s.io/v1 Ingress built for a GameServer."""
    name: str
    namespace: str = "default"
    annotations: Dict[str, str] = field(default_factory=dict)
    labels: Dict[str, str] = field(default_factory=dict)
    owner_references: List[Dict[str, Any]] = field(default_factory=list)
    ingress_class_name: Optional[str] = None
    tls: List[IngressTLS] = field(default_factory=list)
    rules: List[IngressRule] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Ingress":
        metadata = data.get("metadata") or {}
        spec = data.get("spec") or {}
        return cls(
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace") or "default",
            annotations=dict(metadata.get("annotations") or {}),
            labels=dict(metadata.get("labels") or {}),
            owner_references=list(metadata.get("ownerReferences") or []),
            ingress_class_name=spec.get("ingressClassName"),
            tls=[IngressTLS.from_dict(t) for t in spec.get("tls") or []],
            rules=[IngressRule.from_dict(r) for r in spec.get("rules") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Render as a Kubernetes manifest dict."""
        metadata: Dict[str, Any] = {
            "name": self.name,
            "namespace": self.namespace,
        }
        if self.labels:
            metadata["labels"] = dict(self.labels)
        if self.annotations:
            metadata["annotations"] = dict(self.annotations)
        if self.owner_references:
            metadata["ownerReferences"] = copy.deepcopy(self.owner_references)

        spec: Dict[str, Any] = {}
        if self.ingress_class_name:
            spec["ingressClassName"] = self.ingress_class_name
        spec["tls"] = [t.to_dict() for t in self.tls]
        spec["rules"] = [r.to_dict() for r in self.rules]

        return {
            "apiVersion": "networking.k8s.io/v1",
            "kind": "Ingress",
            "metadata": metadata,
            "spec": spec,
        }

    def copy(self) -> "Ingress":
        return copy.deepcopy(self)
