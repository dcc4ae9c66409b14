"""Inventory API routes for VPCs, EC2 instances, EKS clusters and service quotas."""

import logging
from typing import Any, Callable

from flask import Blueprint, Response, current_app, jsonify, request
from werkzeug.exceptions import BadRequest

from packages.api.middleware.error_handler import create_error_response
from packages.inventory import (
    InvalidFieldsError,
    InvalidPayloadError,
    UpstreamError,
    client_from_config,
    list_clusters,
    list_instances,
    list_service_quotas,
    list_vpcs,
    parse_increase_request,
    request_quota_increase,
)
from packages.inventory import formatting

logger = logging.getLogger("aws_inventory.api.routes.inventory")

bp = Blueprint("inventory", __name__)

TEXT_MIMETYPE = "text/plain"
JSON_MIMETYPE = "application/json"


@bp.route("/vpcs", methods=["GET"], provide_automatic_options=False)
def get_vpcs():
    """
    List VPCs.

    Returns:
        200: ``CidrBlock``/``VpcId`` blocks as text, or a JSON list
        500: AWS credentials could not be loaded
        502: DescribeVpcs failed
    """
    vpcs = list_vpcs(client_from_config("ec2", current_app.config))
    return _respond(vpcs, formatting.render_vpcs)


@bp.route("/ec2s", methods=["GET"], provide_automatic_options=False)
def get_ec2s():
    """
    List EC2 instances across all reservations.

    Returns:
        200: instance blocks as text, or a JSON list
        500: AWS credentials could not be loaded
        502: DescribeInstances failed
    """
    instances = list_instances(client_from_config("ec2", current_app.config))
    return _respond(instances, formatting.render_instances)


@bp.route("/eks", methods=["GET"], provide_automatic_options=False)
def get_eks():
    """
    List EKS cluster names.

    Returns:
        200: ``Clusters: <name>`` lines as text, or a JSON list
        500: AWS credentials could not be loaded
        502: ListClusters failed
    """
    clusters = list_clusters(
        client_from_config("eks", current_app.config),
        max_results=current_app.config["EKS_MAX_RESULTS"],
    )
    return _respond(clusters, formatting.render_clusters)


@bp.route("/quotas", methods=["GET"], provide_automatic_options=False)
def get_quotas():
    """
    List applied service quotas per service code.

    Query Parameters:
        service_code: repeatable; overrides QUOTA_SERVICE_CODES

    Returns:
        200: quotas grouped by service code, as text or a JSON object
        500: AWS credentials could not be loaded
        502: ListServiceQuotas failed
    """
    service_codes = [code for code in request.args.getlist("service_code") if code]
    if not service_codes:
        service_codes = current_app.config["QUOTA_SERVICE_CODES"]

    quota_map = list_service_quotas(
        client_from_config("service-quotas", current_app.config), service_codes
    )
    return _respond(quota_map, formatting.render_quotas)


@bp.route("/health", methods=["GET"], provide_automatic_options=False)
def get_health():
    """Liveness probe. Never calls AWS."""
    return jsonify({"status": "ok"}), 200


@bp.route("/quota", methods=["POST"], provide_automatic_options=False)
def request_increase():
    """
    Request a service quota increase.

    Request Body:
        {
            "desired_value": float,
            "quota_code": str,
            "service_code": str
        }

    Returns:
        200: RequestServiceQuotaIncrease response as JSON
        400: body is not valid JSON, or a field is missing or zero
        500: config loading or the AWS call failed
    """
    try:
        payload = request.get_json(force=True)
    except BadRequest:
        logger.warning("Rejected quota increase body: not valid JSON")
        return create_error_response("VALIDATION_ERROR", "Invalid request payload")

    try:
        increase = parse_increase_request(payload)
    except InvalidPayloadError as e:
        logger.warning(f"Rejected quota increase payload: {e}")
        return create_error_response("VALIDATION_ERROR", "Invalid request payload")
    except InvalidFieldsError as e:
        logger.warning(f"Rejected quota increase fields: {e.fields}")
        return create_error_response(
            "VALIDATION_ERROR",
            "One or more fields are invalid",
            details={"fields": e.fields},
        )

    sq_client = client_from_config("service-quotas", current_app.config)

    try:
        result = request_quota_increase(sq_client, increase)
    except UpstreamError as e:
        return create_error_response(
            "UPSTREAM_ERROR",
            f"Failed to request quota increase: {e}",
            details={"aws_error_code": e.error_code},
        )

    logger.info(f"Quota increase requested for {increase.service_code}/{increase.quota_code}")
    return jsonify(result), 200


def _wants_json() -> bool:
    fmt = request.args.get("format")
    if fmt:
        return fmt.lower() == "json"
    return request.accept_mimetypes.best_match([TEXT_MIMETYPE, JSON_MIMETYPE]) == JSON_MIMETYPE


def _respond(result: Any, render_text: Callable[[Any], str]):
    if _wants_json():
        return jsonify(formatting.to_json(result))
    return Response(render_text(result), mimetype=TEXT_MIMETYPE)
