import datetime

import pytest

import hey_sweetie_printer.config
import hey_sweetie_printer.orders
import hey_sweetie_printer.selection

Order = hey_sweetie_printer.orders.Order
Origin = hey_sweetie_printer.orders.Origin
SelectionOptions = hey_sweetie_printer.config.SelectionOptions

NOW = datetime.datetime(2026, 10, 17, 12, 0, 0)


#============================================
def make_order(name: str, quantity: int = 1, **fields) -> Order:
	"""
	Build an Etsy order for selection tests.

	Args:
		name: Recipient name.
		quantity: Units purchased.
		fields: Extra Order fields.

	Returns:
		Order.
	"""
	return Order(origin=Origin.ETSY, name=name, quantity=quantity, **fields)


#============================================
def test_parse_sale_date() -> None:
	"""
	Sale dates are month/day/two-digit-year in the 2000s.
	"""
	parse = hey_sweetie_printer.selection.parse_sale_date
	assert parse("10/15/26") == datetime.date(2026, 10, 15)
	assert parse("1/2/99") == datetime.date(2099, 1, 2)
	assert parse(" 03/07/00 ") == datetime.date(2000, 3, 7)
	assert parse("13/01/26") is None
	assert parse("02/30/26") is None
	assert parse("2026-10-15") is None
	assert parse("10/15/2026") is None
	assert parse("") is None
	assert parse(None) is None


#============================================
def test_sale_date_deadline_is_end_of_day() -> None:
	deadline = hey_sweetie_printer.selection.sale_date_deadline(datetime.date(2026, 10, 16))
	assert deadline == datetime.datetime(2026, 10, 16, 23, 59, 59)


#============================================
def test_fulfillment_policy() -> None:
	"""
	The fulfillment policy keeps orders still awaiting fulfillment.
	"""
	orders = [
		make_order("Ann", awaiting_fulfillment=True),
		make_order("Bob", awaiting_fulfillment=False),
		make_order("Cy", awaiting_fulfillment=True, date_posted="10/01/26"),
	]
	selected = hey_sweetie_printer.selection.select_orders(orders, SelectionOptions())
	assert [order.name for order in selected] == ["Ann", "Cy"]


#============================================
def test_date_window_policy() -> None:
	"""
	Posted orders, orders sold today or later, and orders without a
	readable sale date are left out.
	"""
	orders = [
		make_order("Yesterday", sale_date="10/16/26"),
		make_order("Today", sale_date="10/17/26"),
		make_order("Tomorrow", sale_date="10/18/26"),
		make_order("Posted", sale_date="10/01/26", date_posted="10/02/26"),
		make_order("Unknown", sale_date="someday"),
		make_order("Missing"),
	]
	options = SelectionOptions(mode="date-window", include_today=False)
	selected = hey_sweetie_printer.selection.select_orders(orders, options, now=NOW)
	assert [order.name for order in selected] == ["Yesterday"]


#============================================
def test_date_window_include_today() -> None:
	"""
	Including today skips the sale date check but still drops posted orders.
	"""
	orders = [
		make_order("Yesterday", sale_date="10/16/26"),
		make_order("Today", sale_date="10/17/26"),
		make_order("Posted", sale_date="10/01/26", date_posted="10/02/26"),
		make_order("Undated"),
	]
	options = SelectionOptions(mode="date-window", include_today=True)
	selected = hey_sweetie_printer.selection.select_orders(orders, options, now=NOW)
	assert [order.name for order in selected] == ["Yesterday", "Today", "Undated"]


#============================================
def test_date_window_boundary_second() -> None:
	"""
	A sale day ends at 23:59:59 and must be strictly before now.
	"""
	orders = [make_order("Edge", sale_date="10/16/26")]
	options = SelectionOptions(mode="date-window")
	at_deadline = datetime.datetime(2026, 10, 16, 23, 59, 59)
	after_deadline = datetime.datetime(2026, 10, 17, 0, 0, 0)
	assert hey_sweetie_printer.selection.select_orders(orders, options, now=at_deadline) == []
	assert len(hey_sweetie_printer.selection.select_orders(orders, options, now=after_deadline)) == 1


#============================================
def test_expand_orders_is_quantity_faithful() -> None:
	"""
	Each order becomes `quantity` equal copies, kept together in order.
	"""
	orders = [make_order("Ann", 2), make_order("Bob", 1), make_order("Cy", 3)]
	expanded = hey_sweetie_printer.selection.expand_orders(orders)
	assert len(expanded) == sum(order.quantity for order in orders)
	assert [order.name for order in expanded] == ["Ann", "Ann", "Bob", "Cy", "Cy", "Cy"]
	assert expanded[0] == expanded[1] == orders[0]
	assert expanded[0] is not expanded[1]
	assert expanded[0] is not orders[0]


#============================================
def test_select_orders_empty_result() -> None:
	"""
	Filtering everything out is a valid empty result.
	"""
	orders = [make_order("Bob", awaiting_fulfillment=False)]
	assert hey_sweetie_printer.selection.select_orders(orders, SelectionOptions()) == []
	assert hey_sweetie_printer.selection.select_orders([], SelectionOptions()) == []


#============================================
def test_select_orders_unknown_mode() -> None:
	with pytest.raises(ValueError):
		hey_sweetie_printer.selection.select_orders([], SelectionOptions(mode="weekly"))
