"""
File layout shared by the workbook and CSV codecs.

Both formats carry one section per record kind under the same names, so a
file exported in either format can be imported again.
"""

from datetime import date

from chargelog.models import ChargingRecord, ParkingRecord, RecordKind, new_record_id
from chargelog.utils.form_helpers import safe_float
from chargelog.utils.time_utils import format_date, normalize_date

DOCUMENT_TITLE = '车辆费用记录'
CHARGING_SHEET = '充电记录'
PARKING_SHEET = '停车记录'

# Workbook column headers
COL_DATE = '日期'
COL_MILEAGE = '里程'
COL_AMOUNT = '充电量'
COL_PRICE = '电费单价'
COL_COST = '本次充电总费用'
COL_FULL = '是否充满'
COL_CONSUMPTION = '百公里电耗'
COL_PARKING_COST = '停车费用'

CHARGING_HEADERS = [COL_DATE, COL_MILEAGE, COL_AMOUNT, COL_PRICE, COL_COST, COL_FULL, COL_CONSUMPTION]
PARKING_HEADERS = [COL_DATE, COL_PARKING_COST]

# CSV header rows (with units)
CSV_CHARGING_HEADER = ['日期', '里程(公里)', '充电量(度)', '电费单价(元/度)', '本次充电费用(元)', '是否充满']
CSV_PARKING_HEADER = ['日期', '停车费用(元)']
CSV_DELIMITER = ','
MIN_CHARGING_COLUMNS = 6
MIN_PARKING_COLUMNS = 2

FULL_YES = '是'
FULL_NO = '否'


def charging_values(record) -> list:
    """Cell values for one charging row: display date, whole km, 2-decimal money and energy."""
    return [
        format_date(record.date),
        int(round(safe_float(record.mileage))),
        round(safe_float(record.amount), 2),
        round(safe_float(record.price), 2),
        round(safe_float(record.cost), 2),
        FULL_YES if record.is_full else FULL_NO,
    ]


def parking_values(record) -> list:
    """Cell values for one parking row."""
    return [format_date(record.date), record.cost]


def format_plain_number(value) -> str:
    """Render a number without a spurious ".0", e.g. 15.0 -> "15", 15.5 -> "15.5"."""
    number = safe_float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _canonical_date(value, as_of) -> date:
    return date.fromisoformat(normalize_date(value, as_of=as_of))


def build_charging_record(date_value, mileage, amount, price, cost, full_flag, as_of=None) -> ChargingRecord:
    """Create a charging record with a fresh id from raw cell values."""
    return ChargingRecord(
        id=new_record_id(RecordKind.CHARGING),
        date=_canonical_date(date_value, as_of),
        mileage=safe_float(mileage),
        amount=safe_float(amount),
        price=safe_float(price),
        cost=safe_float(cost),
        is_full=str(full_flag if full_flag is not None else '').strip() == FULL_YES,
    )


def build_parking_record(date_value, cost, as_of=None) -> ParkingRecord:
    """Create a parking record with a fresh id from raw cell values."""
    return ParkingRecord(
        id=new_record_id(RecordKind.PARKING),
        date=_canonical_date(date_value, as_of),
        cost=safe_float(cost),
    )


def is_importable_charging(record) -> bool:
    """Charging rows need a date and a positive odometer reading."""
    return record.date is not None and safe_float(record.mileage) > 0


def is_importable_parking(record) -> bool:
    """Parking rows need a date and a positive cost."""
    return record.date is not None and safe_float(record.cost) > 0
