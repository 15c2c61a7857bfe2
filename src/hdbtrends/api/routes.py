"""
API Routes for the Resale Dashboard

Provides REST API endpoints for:
- Health checks
- The raw record snapshot
- Filter options
- Dashboard aggregates (box plot, trends, summary, price categories)
"""

from typing import List, Optional

from flask import Blueprint, current_app, jsonify, request

from hdbtrends.analytics.categories import category_percentages, resolve_mode
from hdbtrends.analytics.dashboard import DashboardService
from hdbtrends.analytics.filters import RecordFilter
from hdbtrends.core.constants import CategoryMode
from hdbtrends.core.models import records_to_dicts
from hdbtrends.datasource import get_records
from hdbtrends.exceptions import DataSourceError, ValidationError
from hdbtrends.logging_config import get_logger

logger = get_logger(__name__)

# Create blueprint
api = Blueprint("api", __name__, url_prefix="/api")

# Global dashboard instance (lazy loaded)
_service: Optional[DashboardService] = None


def get_service() -> DashboardService:
    """Lazy-load the record snapshot and wrap it in a DashboardService."""
    global _service
    if _service is None:
        _service = DashboardService(get_records())
    return _service


def set_service(service: Optional[DashboardService]) -> None:
    """Replace the cached dashboard (None forces a reload on next use)."""
    global _service
    _service = service


def _list_arg(name: str) -> List[str]:
    """Repeated or comma-separated query values."""
    values = []
    for raw in request.args.getlist(name):
        values.extend(v.strip() for v in raw.split(",") if v.strip())
    return values


def _float_arg(name: str) -> Optional[float]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValidationError(f"Invalid number for {name}: {raw}", field=name, value=raw)


def _filter_from_request(service: DashboardService) -> RecordFilter:
    """Build a RecordFilter from query args; omitted bounds use the defaults."""
    defaults = service.default_filter()

    date_range = defaults.date_range
    start = request.args.get("start") or (date_range[0] if date_range else None)
    end = request.args.get("end") or (date_range[1] if date_range else None)
    if start and end:
        date_range = (start, end)

    lease_range = defaults.lease_range
    lease_min = _float_arg("lease_min")
    lease_max = _float_arg("lease_max")
    if lease_min is not None or lease_max is not None:
        lease_range = (
            lease_min if lease_min is not None else lease_range[0],
            lease_max if lease_max is not None else lease_range[1],
        )

    return RecordFilter(
        towns=tuple(_list_arg("towns")),
        flat_types=tuple(_list_arg("flat_types")),
        date_range=date_range,
        lease_range=lease_range,
    )


@api.errorhandler(ValidationError)
def handle_validation_error(e: ValidationError):
    return jsonify({"status": "error", "error": e.message, "field": e.field}), 400


@api.errorhandler(DataSourceError)
def handle_data_source_error(e: DataSourceError):
    logger.error("Data source error: %s", e.message)
    return jsonify({"status": "error", "error": e.message}), 500


# Health
@api.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint."""
    return jsonify({
        "status": "healthy",
        "snapshot_loaded": _service is not None,
        "record_count": len(_service.records) if _service is not None else 0,
    })


# Data Endpoints
@api.route("/hdb-data", methods=["GET"])
def get_hdb_data():
    """Raw record snapshot, cacheable by shared caches for a day."""
    service = get_service()
    response = jsonify(records_to_dicts(list(service.records)))
    max_age = current_app.config.get("CACHE_MAX_AGE", 86400)
    response.headers["Cache-Control"] = f"s-maxage={max_age}, stale-while-revalidate"
    return response


@api.route("/filters", methods=["GET"])
def get_filters():
    """Options for the filter widgets plus the default selection."""
    service = get_service()
    return jsonify({
        "status": "success",
        "options": service.filter_options(),
        "default_filter": service.default_filter().to_dict(),
    })


@api.route("/dashboard", methods=["GET"])
def get_dashboard():
    """All dashboard aggregates for the selection in the query string."""
    service = get_service()
    record_filter = _filter_from_request(service)
    metric = request.args.get("metric", "resale_price")
    mode = resolve_mode(request.args.get("mode", CategoryMode.COUNT.value))

    view = service.build_view(record_filter, metric)
    return jsonify({
        "status": "success",
        "dashboard": view.to_dict(category_mode=mode.value),
    })


@api.route("/categories", methods=["GET"])
def get_categories():
    """Price-category breakdown in count or percentage mode."""
    service = get_service()
    record_filter = _filter_from_request(service)
    mode = resolve_mode(request.args.get("mode", CategoryMode.PERCENTAGE.value))

    view = service.build_view(record_filter)
    if mode is CategoryMode.PERCENTAGE:
        points = [s.to_dict() for s in category_percentages(view.categories)]
        domain = [0, 100]
    else:
        points = [p.to_dict() for p in view.categories]
        domain = list(view.category_count_domain)

    return jsonify({
        "status": "success",
        "mode": mode.value,
        "categories": points,
        "y_domain": domain,
    })


def register_routes(app):
    """Register API routes with Flask app."""
    app.register_blueprint(api)
    logger.info("API routes registered")
