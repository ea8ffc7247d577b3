"""Data modeling search API routes."""

import logging

from flask import Blueprint, jsonify, request

from moviemodeling.client.routes.config import get_config
from moviemodeling.constants import MODEL_NAMES
from moviemodeling.service.errors import (
    InvalidInputError,
    MalformedResponseError,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)

datamodeling_bp = Blueprint("datamodeling", __name__, url_prefix="/api/datamodeling")


@datamodeling_bp.route("/", methods=["GET"])
def search():
    """Search one data model by title or person name.

    Query parameters:
        dataModel: Single, Embedded, Reference or Hybrid
        searchValue: Title (or person name) to look for
        searchType: Optional "person" (Single model only)
        docId: Optional document id; turns the request into a point read

    Response:
        {
            "mediaResults": [{...}, ...],
            "requestDiagnostics": {
                "data_model": "Single",
                "query_type": "Point Read",
                "request_charge": "1.00",
                ...
            }
        }

    Returns:
        200 with results, 400 on invalid input, 404 when nothing matched,
        502 when the document store fails, 503 before the router is initialized
    """
    config = get_config()
    data_model = request.args.get("dataModel", "")
    search_value = request.args.get("searchValue", "")
    search_type = request.args.get("searchType") or None
    doc_id = request.args.get("docId") or None

    if not data_model.strip():
        return (
            jsonify(
                {
                    "error": "Please provide a valid data model: "
                    + ",".join(f"'{name}'" for name in MODEL_NAMES)
                }
            ),
            400,
        )
    if not search_value.strip():
        return jsonify({"error": "Please provide a valid search value"}), 400

    if config.router is None:
        logger.error("❌ Query router is not initialized")
        return jsonify({"error": "Query router is not initialized"}), 503

    logger.info(f"🔍 {data_model} search for '{search_value}' (docId={doc_id})")
    try:
        response = config.router.query(data_model, search_value, search_type, doc_id)
    except InvalidInputError as e:
        logger.warning(f"❌ {e}")
        return jsonify({"error": str(e)}), 400
    except (StoreUnavailableError, MalformedResponseError) as e:
        logger.error(f"❌ Document store failure: {e}", exc_info=True)
        return jsonify({"error": str(e)}), 502
    except Exception as e:
        logger.error(f"❌ Error processing search request: {e}", exc_info=True)
        return jsonify({"error": f"Internal server error: {str(e)}"}), 500

    if response is None:
        return jsonify({"error": "Not found"}), 404

    diagnostics = response.diagnostics
    config.benchmark.record(diagnostics.query_type, response.total_cost, diagnostics.data_model)
    logger.info(
        f"✅ {diagnostics.query_type} returned {len(response.results)} document(s), "
        f"cost {diagnostics.request_charge}"
    )
    return jsonify(response.to_dict())
