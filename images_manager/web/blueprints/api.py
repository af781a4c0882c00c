"""API blueprint exposing the workspace operations as JSON endpoints."""

from flask import Blueprint, request, jsonify, current_app
from ...core.scanner import ImageScanner
from ...core.mutator import FileMutator
from ...core.workspace import WorkspaceBootstrapper, validate_workspace_path, workspace_name_from_path
from ...core.image_access import image_absolute_path, image_as_data_url
from ...core.models import MoveRequest, RenameRequest
from ...core.exceptions import ErrorKind, ValidationError

api_bp = Blueprint('api', __name__)


STATUS_CODES = {
    ErrorKind.WORKSPACE_NOT_FOUND: 404,
    ErrorKind.PATH_NOT_FOUND: 404,
    ErrorKind.SOURCE_MISSING: 404,
    ErrorKind.TARGET_EXISTS: 409,
    ErrorKind.NOT_A_DIRECTORY: 400,
    ErrorKind.INVALID_PATH: 400,
    ErrorKind.INVALID_REQUEST: 400,
    ErrorKind.IO_FAILURE: 500,
}


def validate_request_data(data, required_fields):
    """
    Validate request data contains required string fields.

    Args:
        data: Request data dictionary
        required_fields: List of required field names

    Raises:
        ValidationError: If validation fails
    """
    if not data or not isinstance(data, dict):
        raise ValidationError("Request body is required")

    missing_fields = [field for field in required_fields if not isinstance(data.get(field), str)]
    if missing_fields:
        raise ValidationError(f"Missing required fields: {', '.join(missing_fields)}")
    return data


def handle_api_error(error, operation="operation"):
    """
    Build the JSON error response for a workspace error.

    Args:
        error: The exception that occurred
        operation: Description of the operation that failed

    Returns:
        Tuple of (response_dict, status_code)
    """
    status_code = STATUS_CODES.get(error.kind, 500)
    if status_code >= 500:
        current_app.logger.error(f"API error in {operation}: {error}")
    else:
        current_app.logger.warning(f"API error in {operation}: {error}")

    response_data = {'error': error.kind.value}
    response_data.update(error.to_dict())
    return response_data, status_code


@api_bp.route('/workspace/validate', methods=['POST'])
def validate_workspace():
    """Check that a path exists and is a directory. JSON body: path."""
    data = validate_request_data(request.get_json(silent=True), ['path'])
    workspace_path = validate_workspace_path(data['path'])
    return jsonify({
        'valid': True,
        'name': workspace_name_from_path(workspace_path.resolve())
    })


@api_bp.route('/workspace/structure', methods=['POST'])
def ensure_workspace_structure():
    """Create the control directory. JSON body: workspace_path."""
    data = validate_request_data(request.get_json(silent=True), ['workspace_path'])
    db_path = WorkspaceBootstrapper().ensure_structure(data['workspace_path'])
    return jsonify({'db_path': db_path})


@api_bp.route('/workspace/open', methods=['POST'])
def open_workspace():
    """Validate, name and prepare a workspace. JSON body: path."""
    data = validate_request_data(request.get_json(silent=True), ['path'])
    workspace = WorkspaceBootstrapper().open_workspace(data['path'])
    return jsonify(workspace.to_dict())


@api_bp.route('/images/scan', methods=['POST'])
def scan_images():
    """List every image of a workspace. JSON body: workspace_path."""
    data = validate_request_data(request.get_json(silent=True), ['workspace_path'])
    images = ImageScanner().scan(data['workspace_path'])
    return jsonify({
        'images': [image.to_dict() for image in images],
        'count': len(images)
    })


@api_bp.route('/images/move', methods=['POST'])
def move_image():
    """JSON body: old_path, new_path, workspace_path."""
    data = validate_request_data(request.get_json(silent=True), ['old_path', 'new_path', 'workspace_path'])
    move_request = MoveRequest.from_dict(data)
    return jsonify({'relative_path': FileMutator().move(move_request)})


@api_bp.route('/images/rename', methods=['POST'])
def rename_image():
    """JSON body: old_name, new_name, relative_path, workspace_path."""
    data = validate_request_data(
        request.get_json(silent=True), ['old_name', 'new_name', 'relative_path', 'workspace_path']
    )
    rename_request = RenameRequest.from_dict(data)
    return jsonify({'relative_path': FileMutator().rename(rename_request)})


@api_bp.route('/images/delete', methods=['POST'])
def delete_image():
    """JSON body: relative_path, workspace_path."""
    data = validate_request_data(request.get_json(silent=True), ['relative_path', 'workspace_path'])
    deleted = FileMutator().delete(data['relative_path'], data['workspace_path'])
    return jsonify({'deleted': deleted})


@api_bp.route('/images/absolute-path', methods=['POST'])
def get_image_absolute_path():
    """JSON body: relative_path, workspace_path."""
    data = validate_request_data(request.get_json(silent=True), ['relative_path', 'workspace_path'])
    return jsonify({
        'absolute_path': image_absolute_path(data['relative_path'], data['workspace_path'])
    })


@api_bp.route('/images/base64', methods=['POST'])
def get_image_as_base64():
    """JSON body: relative_path, workspace_path."""
    data = validate_request_data(request.get_json(silent=True), ['relative_path', 'workspace_path'])
    return jsonify({
        'data_url': image_as_data_url(data['relative_path'], data['workspace_path'])
    })
