"""Calendar and analytics routes."""

from __future__ import annotations

from datetime import MAXYEAR, MINYEAR

from flask import Response, jsonify, request

from ...extensions import get_app_session
from ...services.charts import distribution_chart_png, trend_chart_png
from . import bp


@bp.get("/calendar/")
def calendar_view():
    """Month grid for ``?year=&month=`` (defaults to the current month)."""

    session = get_app_session()
    session.require_user()
    year = request.args.get("year", type=int)
    month = request.args.get("month", type=int)
    if year is not None and not MINYEAR <= year <= MAXYEAR:
        return jsonify({"error": "invalid_year", "year": year}), 400
    if month is not None and not 1 <= month <= 12:
        return jsonify({"error": "invalid_month", "month": month}), 400
    return jsonify(session.calendar(year=year, month=month).to_dict())


@bp.get("/analytics/")
def analytics_view():
    session = get_app_session()
    session.require_user()
    return jsonify(session.analytics().to_dict())


@bp.get("/analytics/trend.png")
def trend_chart():
    session = get_app_session()
    session.require_user()
    return Response(trend_chart_png(session.analytics()), mimetype="image/png")


@bp.get("/analytics/distribution.png")
def distribution_chart():
    session = get_app_session()
    session.require_user()
    return Response(distribution_chart_png(session.analytics()), mimetype="image/png")
