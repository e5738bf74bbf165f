"""
Calculation Constants for ChargeLog

Centralized location for rounding, chart limits and the localized labels the
dashboard shows next to each metric.
"""

from chargelog.config import Config

# Rounding
MONEY_DECIMALS = 2  # Fees, cost per km, cost per day
ENERGY_DECIMALS = 2  # kWh totals and consumption per 100 km

# Consumption
DISTANCE_SCALE = 100  # Consumption is reported per 100 km
CONSUMPTION_CHART_POINTS = Config.CONSUMPTION_CHART_POINTS  # Most recent checkpoint intervals shown

# Cost per day
DEFAULT_PERIOD_DAYS = 1  # Day count when the previous period has no records

# Overview titles and card labels keyed by window value
OVERVIEW_TITLES = {
    'month': '本月概览',
    'year': '今年概览',
    'all': '全部概览',
}

OVERVIEW_LABELS = {
    'month': ('本月里程', '本月总充电量', '本月充电费用', '本月停车费'),
    'year': ('今年里程', '今年总充电量', '今年充电费用', '今年停车费'),
    'all': ('全部里程', '全部总充电量', '全部充电费用', '全部停车费'),
}

# Units shown on dashboard cards
UNIT_DAYS = '天'
UNIT_CONSUMPTION = '度/百公里'
UNIT_CURRENCY = '元'
UNIT_COUNT = '次'
UNIT_ENERGY = '度'
UNIT_DISTANCE = '公里'
UNIT_PER_KM = '/公里'
UNIT_PER_DAY = '/天'
