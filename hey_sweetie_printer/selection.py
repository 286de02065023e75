"""
Order selection and quantity expansion.
"""

# Standard Library
import dataclasses
import datetime
import re

# local repo modules
import hey_sweetie_printer as hsp
import hey_sweetie_printer.config
import hey_sweetie_printer.orders


Order = hsp.orders.Order
SelectionOptions = hsp.config.SelectionOptions

SELECTION_MODE_FULFILLMENT = hsp.config.SELECTION_MODE_FULFILLMENT
SELECTION_MODE_DATE_WINDOW = hsp.config.SELECTION_MODE_DATE_WINDOW
SELECTION_MODES = hsp.config.SELECTION_MODES

# two digit years in sale dates always mean 20YY
SALE_DATE_CENTURY = 2000
SALE_DATE_PATTERN = re.compile(r"^\s*(\d{1,2})/(\d{1,2})/(\d{2})\s*$")


#============================================
def parse_sale_date(value: str | None) -> datetime.date | None:
	"""
	Parse a month/day/two-digit-year sale date.

	Args:
		value: Date text like "10/15/26".

	Returns:
		Date, or None when the value is missing or not a real date.
	"""
	if value is None:
		return None
	match = SALE_DATE_PATTERN.match(value)
	if match is None:
		return None
	month = int(match.group(1))
	day = int(match.group(2))
	year = SALE_DATE_CENTURY + int(match.group(3))
	try:
		return datetime.date(year, month, day)
	except ValueError:
		return None


#============================================
def sale_date_deadline(sale_date: datetime.date) -> datetime.datetime:
	"""
	Return the last second of a sale date in local time.

	Args:
		sale_date: Sale date.

	Returns:
		Naive local datetime at 23:59:59.
	"""
	return datetime.datetime.combine(sale_date, datetime.time(23, 59, 59))


#============================================
def filter_awaiting_fulfillment(orders: list[Order]) -> list[Order]:
	"""
	Keep orders that have not been fulfilled yet.

	Args:
		orders: Normalized orders.

	Returns:
		Orders still awaiting fulfillment.
	"""
	return [order for order in orders if order.awaiting_fulfillment]


#============================================
def filter_date_window(
	orders: list[Order],
	include_today: bool,
	now: datetime.datetime,
) -> list[Order]:
	"""
	Keep unposted orders whose sale day has already ended.

	Without include_today an order needs a readable sale date to be kept.

	Args:
		orders: Normalized orders.
		include_today: Skip the sale date check entirely.
		now: Current naive local time.

	Returns:
		Orders inside the date window.
	"""
	selected: list[Order] = []
	for order in orders:
		if order.date_posted:
			continue
		if not include_today:
			sale_date = parse_sale_date(order.sale_date)
			if sale_date is None or not sale_date_deadline(sale_date) < now:
				continue
		selected.append(order)
	return selected


#============================================
def expand_orders(orders: list[Order]) -> list[Order]:
	"""
	Repeat each order once per unit purchased.

	Args:
		orders: Selected orders.

	Returns:
		Expanded orders, copies of one order kept together.
	"""
	expanded: list[Order] = []
	for order in orders:
		for _ in range(order.quantity):
			expanded.append(dataclasses.replace(order))
	return expanded


#============================================
def select_orders(
	orders: list[Order],
	options: SelectionOptions,
	now: datetime.datetime | None = None,
) -> list[Order]:
	"""
	Filter orders by the configured policy and expand by quantity.

	Args:
		orders: Normalized orders.
		options: Selection options.
		now: Current time override, defaults to the local clock.

	Returns:
		Expanded list of orders to print; may be empty.
	"""
	if options.mode not in SELECTION_MODES:
		raise ValueError(f"Unknown selection mode: {options.mode}")
	if options.mode == SELECTION_MODE_DATE_WINDOW:
		if now is None:
			now = datetime.datetime.now()
		selected = filter_date_window(orders, options.include_today, now)
	else:
		selected = filter_awaiting_fulfillment(orders)
	return expand_orders(selected)
