import logging
from flask import Blueprint, jsonify, request, current_app

from sensei.dom.document_analyzer import is_valid_html
from sensei.dom.element_analyzer import analyze_elements
from sensei.dom.registry import ElementRegistry
from sensei.dom.document_rules import DOCUMENT_RULES

logger = logging.getLogger(__name__)

analyze_router = Blueprint('analyze_router', __name__)

DEFAULT_SOURCE = "html-input"


# --- HELPER FUNCTIONS ---

def get_audit_controller():
    """Retrieves the audit controller from the Flask application context."""
    controller = current_app.config.get('AUDIT_CONTROLLER')
    if not controller:
        raise RuntimeError("AuditController is not set in app.config['AUDIT_CONTROLLER']")
    return controller


def _read_upload(upload):
    """Returns the decoded upload, or None when it is not a UTF-8 HTML document."""
    try:
        text = upload.read().decode("utf-8")
    except UnicodeDecodeError:
        return None
    return text if is_valid_html(text) else None


def _read_json_body():
    """
    Returns (html, url, type) from the JSON body, or raises ValueError with a
    client-facing message when the body is not an object or a field has the wrong type.
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValueError("Request body must be a JSON object with an 'html' field")

    html = payload.get('html')
    if not isinstance(html, str) or not html.strip():
        raise ValueError("No HTML supplied")

    fields = []
    for name, default in (('url', DEFAULT_SOURCE), ('type', "html")):
        value = payload.get(name)
        if value is not None and not isinstance(value, str):
            raise ValueError(f"'{name}' must be a string")
        fields.append(value or default)

    return html, fields[0], fields[1]


# --- API ROUTES ---

@analyze_router.route('/analyze', methods=['POST'])
def analyze():
    """
    Full audit of submitted markup.
    Accepts a JSON body {"html", "url"?, "type"?} or a multipart 'file' upload.
    """
    upload = request.files.get('file')
    if upload is not None:
        html = _read_upload(upload)
        if html is None:
            return jsonify({"error": "Uploaded file is not a valid HTML document"}), 400
        source = upload.filename or DEFAULT_SOURCE
        source_type = "file"
    else:
        try:
            html, source, source_type = _read_json_body()
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

    report = get_audit_controller().audit_html(html, source, type=source_type)
    return jsonify(report.model_dump(mode="json", by_alias=True))


@analyze_router.route('/analyze/elements', methods=['POST'])
def analyze_element_level():
    """Element-level analysis only."""
    try:
        html, source, _ = _read_json_body()
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    result = analyze_elements(html, source)
    return jsonify(result.model_dump(mode="json", by_alias=True))


@analyze_router.route('/rules', methods=['GET'])
def list_rules():
    """Describes the rule catalogue: document checks and element codes per category."""
    ElementRegistry.discover()
    return jsonify({
        "document": {rule.__name__: rule.defined_codes for rule in DOCUMENT_RULES},
        "elements": ElementRegistry.get_codes_by_category(),
    })


@analyze_router.route('/health', methods=['GET'])
def health():
    return jsonify({"status": "ok"})
