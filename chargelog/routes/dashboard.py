"""
Dashboard routes for ChargeLog.

Read-only metric payloads. Every endpoint accepts ``as_of=YYYY-MM-DD`` to
evaluate the windows against a fixed date instead of today.
"""

import logging

from flask import Blueprint, jsonify, request

from chargelog.calculations import (
    consumption_series,
    cost_breakdown,
    dashboard_summary,
    period_overview,
)
from chargelog.calculations.constants import CONSUMPTION_CHART_POINTS
from chargelog.database import get_store
from chargelog.models import RecordKind

from .helpers import as_of_arg, window_arg

logger = logging.getLogger(__name__)

dashboard_bp = Blueprint("dashboard", __name__)


def _collections():
    store = get_store()
    return store.get(RecordKind.CHARGING), store.get(RecordKind.PARKING)


@dashboard_bp.route("/dashboard", methods=["GET"])
def get_dashboard():
    """All dashboard cards for ``window`` (month, year, lastMonth, lastYear, total)."""
    charging, parking = _collections()
    return jsonify(dashboard_summary(charging, parking, window_arg(), as_of=as_of_arg()))


@dashboard_bp.route("/overview", methods=["GET"])
def get_overview():
    """Mileage, energy and fee cards for the month, year or all time."""
    charging, parking = _collections()
    return jsonify(period_overview(charging, parking, window_arg(), as_of=as_of_arg()))


@dashboard_bp.route("/charts/consumption", methods=["GET"])
def get_consumption_chart():
    """Consumption per checkpoint interval, oldest first."""
    limit = request.args.get("limit", CONSUMPTION_CHART_POINTS, type=int)
    charging, _ = _collections()
    return jsonify({"points": consumption_series(charging, limit=limit)})


@dashboard_bp.route("/charts/cost", methods=["GET"])
def get_cost_chart():
    """Charging vs parking spend for ``window`` (year or total)."""
    charging, parking = _collections()
    return jsonify(cost_breakdown(charging, parking, window_arg("year"), as_of=as_of_arg()))
