"""
Kopf bridge for validating handlers.

Registers a ValidatingHandler as a ``kopf.on.validate`` handler. Kopf passes
already-parsed objects, so they are re-encoded to raw JSON and go through
the same decode, dispatch and translate path as any other request. A denying
response becomes a ``kopf.AdmissionError`` carrying the response's code and
message; warnings are appended to Kopf's ``warnings`` list in both cases.
"""

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any

import kopf

from admission_webhook.admission.handler import ValidatingHandler
from admission_webhook.errors import StatusError
from admission_webhook.models.admission import AdmissionRequest, Operation
from admission_webhook.models.resource import GroupVersionKind
from admission_webhook.utils.handler_logging import log_handler_entry

logger = logging.getLogger(__name__)


def _raw(obj: Mapping[str, Any] | None) -> bytes | None:
    if obj is None:
        return None
    return json.dumps(dict(obj)).encode("utf-8")


def build_request(
    group: str,
    version: str,
    operation: str,
    body: Mapping[str, Any] | None,
    old: Mapping[str, Any] | None = None,
    uid: str = "",
    name: str = "",
    namespace: str = "",
    dryrun: bool = False,
) -> AdmissionRequest:
    """
    Build an AdmissionRequest from the arguments Kopf hands to validators.

    For DELETE, Kopf's body is the object being deleted; it becomes the
    request's old object when ``old`` is not supplied.

    Args:
        group: API group the handler is registered for
        version: API version the handler is registered for
        operation: Admission operation (CREATE, UPDATE, DELETE, CONNECT)
        body: New object (or the deleted object for DELETE)
        old: Previous object for UPDATE and DELETE
        uid: Admission request uid
        name: Resource name
        namespace: Resource namespace
        dryrun: Whether the request is a dry run

    Returns:
        The equivalent AdmissionRequest
    """
    op = Operation(operation.upper())
    new_obj: Mapping[str, Any] | None = body
    old_obj = old

    if op == Operation.DELETE:
        old_obj = old if old is not None else body
        new_obj = None
    elif op == Operation.CREATE:
        old_obj = None

    kind = (body or old or {}).get("kind", "")
    return AdmissionRequest(
        uid=uid,
        kind=GroupVersionKind(group=group, version=version, kind=kind),
        name=name,
        namespace=namespace,
        operation=op,
        object=_raw(new_obj),
        old_object=_raw(old_obj),
        dry_run=dryrun,
    )


def register_validating_webhook(
    handler: ValidatingHandler,
    group: str,
    version: str,
    plural: str,
    *,
    id: str | None = None,
    registry: kopf.OperatorRegistry | None = None,
):
    """
    Register ``handler`` as a Kopf validating admission webhook.

    Args:
        handler: Validating handler to run for each admission request
        group: API group of the validated resource
        version: API version of the validated resource
        plural: Plural resource name
        id: Kopf handler id (defaults to ``validate-<plural>``)
        registry: Kopf registry to register into (the default registry if omitted)

    Returns:
        The registered coroutine function
    """

    @kopf.on.validate(
        group, version, plural, id=id or f"validate-{plural}", registry=registry
    )
    async def validate(
        body: Mapping[str, Any],
        operation: str,
        uid: str = "",
        name: str = "",
        namespace: str = "",
        dryrun: bool = False,
        warnings: list[str] | None = None,
        old: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        log_handler_entry(
            operation=operation,
            resource_kind=plural,
            name=name,
            namespace=namespace,
            extra={"request_uid": uid, "dry_run": dryrun},
        )

        try:
            request = build_request(
                group=group,
                version=version,
                operation=operation,
                body=body,
                old=old,
                uid=uid,
                name=name,
                namespace=namespace,
                dryrun=dryrun,
            )
        except ValueError as e:
            logger.warning(f"Unsupported admission operation {operation!r}: {e}")
            error = StatusError.bad_request(f"unknown operation {operation!r}")
            raise error.as_kopf_error() from e

        response = await asyncio.to_thread(handler.handle, request)

        if warnings is not None:
            warnings.extend(response.warnings)

        if not response.allowed:
            raise StatusError(response.result).as_kopf_error()

    return validate
