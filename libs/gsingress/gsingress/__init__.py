"""
gsingress - Expose Agones GameServers through Kubernetes Ingress

Derives the routing rule, TLS block and annotations of an Ingress from the
annotations of a GameServer.
"""

__version__ = "0.1.0"

from .types import (
    RoutingMode,
    GameServerState,
    GameServer,
    GameServerPort,
    Ingress,
    IngressRule,
    IngressTLS,
    from_object,
    has_annotation,
    get_ingress_routing_mode,
    get_tls_cert_issuer,
    is_ready,
)

from .errors import (
    IngressOptionError,
    MissingAnnotationError,
    ValidationError,
    ConfigurationError,
)

from .options import (
    IngressOption,
    apply_options,
    with_custom_annotations,
    with_ingress_rule,
    with_tls,
    with_tls_cert_issuer,
)

from .generators import (
    new_ingress,
    default_options,
    build_ingress,
    generate_ingress_manifest,
    generate_all_manifests,
)

from .parser import (
    load_manifests,
    load_gameservers,
)

__all__ = [
    # Types
    "RoutingMode",
    "GameServerState",
    "GameServer",
    "GameServerPort",
    "Ingress",
    "IngressRule",
    "IngressTLS",
    "from_object",
    "has_annotation",
    "get_ingress_routing_mode",
    "get_tls_cert_issuer",
    "is_ready",
    # Errors
    "IngressOptionError",
    "MissingAnnotationError",
    "ValidationError",
    "ConfigurationError",
    # Options
    "IngressOption",
    "apply_options",
    "with_custom_annotations",
    "with_ingress_rule",
    "with_tls",
    "with_tls_cert_issuer",
    # Generators
    "new_ingress",
    "default_options",
    "build_ingress",
    "generate_ingress_manifest",
    "generate_all_manifests",
    # Parser
    "load_manifests",
    "load_gameservers",
]
