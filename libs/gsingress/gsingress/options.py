"""
Ingress options for gsingress.

An option is a callable taking (GameServer, Ingress). It reads only from the
GameServer and mutates the Ingress in place, raising an IngressOptionError
when the GameServer's annotations don't allow it to do its job.
"""

import logging
from typing import Callable, List, Union

from .errors import ConfigurationError, MissingAnnotationError, ValidationError
from .types import (
    ANNOTATION_CUSTOM_PREFIX,
    ANNOTATION_INGRESS_DOMAIN,
    ANNOTATION_INGRESS_FQDN,
    ANNOTATION_ISSUER_NAME,
    ANNOTATION_SECRET_NAME,
    ANNOTATION_TERMINATE_TLS,
    CERT_MANAGER_ANNOTATION_ISSUER,
    GameServer,
    Ingress,
    IngressRule,
    IngressTLS,
    RoutingMode,
    get_game_server_port,
    has_annotation,
)

logger = logging.getLogger(__name__)

IngressOption = Callable[[GameServer, Ingress], None]

_TRUE_VALUES = ("1", "t", "T", "TRUE", "true", "True")
_FALSE_VALUES = ("0", "f", "F", "FALSE", "false", "False")


def _mode_name(mode: Union[RoutingMode, str]) -> str:
    return mode.value if isinstance(mode, RoutingMode) else str(mode)


def parse_bool(value: str) -> bool:
    """Parse a boolean annotation value. Raises ValueError on anything else."""
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean: {value!r}")


def with_custom_annotations() -> IngressOption:
    """Copy octops- prefixed annotations onto the Ingress, prefix stripped.

    Annotations copied before a failing key are left on the Ingress.
    """
    def option(gs: GameServer, ingress: Ingress) -> None:
        for key, value in gs.annotations.items():
            if not key.startswith(ANNOTATION_CUSTOM_PREFIX):
                continue
            custom = key[len(ANNOTATION_CUSTOM_PREFIX):]
            if not custom:
                raise ValidationError(
                    "custom annotation does not contain a suffix",
                    annotation=key,
                    gameserver=gs.name,
                )
            ingress.annotations[custom] = value

    return option


def with_tls(mode: Union[RoutingMode, str]) -> IngressOption:
    """Set the Ingress TLS block for the routing mode.

    The secret defaults to "<name>-tls"; the secret-name annotation replaces
    it verbatim.
    """
    mode_name = _mode_name(mode)

    def missing(gs: GameServer, annotation: str) -> MissingAnnotationError:
        return MissingAnnotationError(
            f"ingress routing mode {mode_name} requires the annotation {annotation} to be set",
            mode=mode_name,
            annotation=annotation,
            gameserver=gs.name,
        )

    def option(gs: GameServer, ingress: Ingress) -> None:
        if mode == RoutingMode.PATH:
            fqdn, ok = has_annotation(gs, ANNOTATION_INGRESS_FQDN)
            if not ok:
                raise missing(gs, ANNOTATION_INGRESS_FQDN)
            host = fqdn
        else:
            domain, ok = has_annotation(gs, ANNOTATION_INGRESS_DOMAIN)
            if not ok:
                raise missing(gs, ANNOTATION_INGRESS_DOMAIN)
            host = f"{gs.name}.{domain}"

        secret = f"{gs.name}-tls"
        specific_secret, ok = has_annotation(gs, ANNOTATION_SECRET_NAME)
        if ok:
            secret = specific_secret

        ingress.tls = [IngressTLS(hosts=[host], secret_name=secret)]

    return option


def with_ingress_rule(mode: Union[RoutingMode, str]) -> IngressOption:
    """Set the single Ingress rule routing to the GameServer's service."""
    mode_name = _mode_name(mode)

    def missing(gs: GameServer, annotation: str) -> MissingAnnotationError:
        return MissingAnnotationError(
            f"ingress routing mode {mode_name} requires the annotation {annotation} "
            f"to be present on {gs.name}, check your Fleet or GameServer manifest.",
            mode=mode_name,
            annotation=annotation,
            gameserver=gs.name,
        )

    def option(gs: GameServer, ingress: Ingress) -> None:
        if mode == RoutingMode.PATH:
            fqdn, ok = has_annotation(gs, ANNOTATION_INGRESS_FQDN)
            if not ok:
                raise missing(gs, ANNOTATION_INGRESS_FQDN)
            host, path = fqdn, "/" + gs.name
        else:
            domain, ok = has_annotation(gs, ANNOTATION_INGRESS_DOMAIN)
            if not ok:
                raise missing(gs, ANNOTATION_INGRESS_DOMAIN)
            host, path = f"{gs.name}.{domain}", "/"

        ingress.rules = new_ingress_rule(host, path, gs.name, get_game_server_port(gs).port)

    return option


def with_tls_cert_issuer(issuer_name: str) -> IngressOption:
    """Request a certificate from cert-manager when TLS termination is on.

    Skipped when terminate-tls is absent, empty or false, and when the
    GameServer names its own secret.
    """
    def option(gs: GameServer, ingress: Ingress) -> None:
        terminate, ok = has_annotation(gs, ANNOTATION_TERMINATE_TLS)
        if not ok or not terminate:
            return

        try:
            terminate_tls = parse_bool(terminate)
        except ValueError:
            raise ValidationError(
                f'annotation {ANNOTATION_TERMINATE_TLS} for {gs.name} must be "true" or "false"',
                annotation=ANNOTATION_TERMINATE_TLS,
                gameserver=gs.name,
            ) from None
        if not terminate_tls:
            return

        _, has_secret = has_annotation(gs, ANNOTATION_SECRET_NAME)
        if has_secret:
            return

        if not issuer_name:
            raise ConfigurationError(
                f"annotation {ANNOTATION_ISSUER_NAME} for {gs.name} must be present, "
                "check your Fleet or GameServer manifest.",
                annotation=ANNOTATION_ISSUER_NAME,
                gameserver=gs.name,
            )

        ingress.annotations[CERT_MANAGER_ANNOTATION_ISSUER] = issuer_name

    return option


def apply_options(gs: GameServer, ingress: Ingress, *options: IngressOption) -> Ingress:
    """Run options in order against ingress, stopping at the first error.

    Options that ran before the failure keep their changes.
    """
    for option in options:
        option(gs, ingress)
    logger.debug(f"Applied {len(options)} ingress options for {gs.name}")
    return ingress


def new_ingress_rule(host: str, path: str, name: str, port: int) -> List[IngressRule]:
    return [IngressRule(host=host, path=path, service_name=name, port=port)]


def new_ingress_tls(host: str, secret_name: str) -> List[IngressTLS]:
    """TLS block with a "-tls" suffixed secret.

    Not used by the option pipeline; with_tls decides secret names there.
    """
    return [
        IngressTLS(
            hosts=[host.strip()],
            secret_name=f"{secret_name.strip()}-tls",
        )
    ]
