"""
Record routes for ChargeLog.

CRUD for charging and parking records, free-text parsing for the entry form
and the charge form auto-calculation.
"""

import logging
from datetime import date

from flask import Blueprint, jsonify

from chargelog.calculations import annotate_consumption
from chargelog.database import get_store
from chargelog.exceptions import RecordValidationError
from chargelog.models import RECORD_MODELS, RecordKind
from chargelog.utils import (
    fill_missing_charge_field,
    normalize_date,
    parse_charging_text,
    parse_parking_text,
    present_fields,
    validate_charging_entry,
    validate_parking_entry,
)

from .helpers import as_of_arg, json_body

logger = logging.getLogger(__name__)

records_bp = Blueprint("records", __name__)

KIND_PATH = "<any(charging, parking):kind>"


def _entry_fields(kind: RecordKind, data: dict) -> dict:
    """Validate a submitted record and return the column values to store."""
    if not str(data.get("date") or "").strip():
        raise RecordValidationError("Date is required", field="date")

    if kind is RecordKind.CHARGING:
        fields = validate_charging_entry(data)
    else:
        fields = validate_parking_entry(data)

    fields["date"] = date.fromisoformat(normalize_date(data["date"], as_of=as_of_arg()))
    return fields


@records_bp.route(f"/{KIND_PATH}", methods=["GET"])
def list_records(kind):
    """
    List all records of one kind.

    Charging records come newest first, with the consumption of each
    interval on the full charge that closes it.
    """
    kind = RecordKind(kind)
    records = get_store().get(kind)

    if kind is RecordKind.CHARGING:
        return jsonify(annotate_consumption(records))
    return jsonify([r.to_dict() for r in reversed(records)])


@records_bp.route(f"/{KIND_PATH}", methods=["POST"])
def add_record(kind):
    """
    Add a record.

    Request body (charging):
        date: Date in any supported form (required)
        mileage: Odometer reading, rounded to whole km (required, > 0)
        amount, price, cost: At least one must be > 0
        is_full: Whether the battery was charged to full

    Request body (parking):
        date: Date (required)
        cost: Parking fee (required, > 0)
    """
    kind = RecordKind(kind)
    fields = _entry_fields(kind, json_body())

    record = get_store().add(kind, RECORD_MODELS[kind](**fields))
    return jsonify(record.to_dict()), 201


@records_bp.route(f"/{KIND_PATH}/<record_id>", methods=["PUT"])
def update_record(kind, record_id):
    """Replace the editable fields of a record."""
    kind = RecordKind(kind)
    fields = _entry_fields(kind, json_body())

    store = get_store()
    if not store.update(kind, record_id, fields):
        return jsonify({"error": "Record not found"}), 404

    return jsonify(store.get_by_id(kind, record_id).to_dict())


@records_bp.route(f"/{KIND_PATH}/<record_id>", methods=["DELETE"])
def delete_record(kind, record_id):
    """Delete a record. An unknown id is not an error; nothing changes."""
    deleted = get_store().delete(RecordKind(kind), record_id)
    return jsonify({"deleted": deleted})


@records_bp.route("/records", methods=["DELETE"])
def clear_records():
    """Delete every charging and parking record."""
    get_store().clear()
    return jsonify({"cleared": True})


@records_bp.route(f"/parse/{KIND_PATH}", methods=["POST"])
def parse_text(kind):
    """
    Parse a free-text description into entry form values.

    Request body:
        text: e.g. "2024-03-05 12345公里 30度 36元"

    Returns:
        The parsed fields plus ``found``, the numeric fields that were present
    """
    text = str(json_body().get("text") or "")
    as_of = as_of_arg()

    if RecordKind(kind) is RecordKind.CHARGING:
        parsed = parse_charging_text(text, as_of=as_of)
    else:
        parsed = parse_parking_text(text, as_of=as_of)

    parsed["found"] = present_fields(parsed)
    return jsonify(parsed)


@records_bp.route("/charging/fill", methods=["POST"])
def fill_charge_fields():
    """Derive the missing one of amount, price and cost from the other two."""
    data = json_body()
    return jsonify(fill_missing_charge_field(data.get("amount"), data.get("price"), data.get("cost")))
