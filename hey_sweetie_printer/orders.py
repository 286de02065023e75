"""
Order export parsing and normalization.

Rows arrive from one of three export shapes (Etsy sold order items,
Wix orders, or a hand made bulk sheet). Each shape is described by a
FieldMap entry in FIELD_MAPS; normalize() turns any row into an Order.
"""

# Standard Library
import csv
import dataclasses
import enum
import pathlib
import re


RULE_DATE_POSTED_BLANK = "date-posted-blank"
RULE_STATUS_NOT_FULFILLED = "status-not-fulfilled"
RULE_ALWAYS = "always"

WIX_AWAITING_STATUS = "not fulfilled"
# Etsy puts every listing variation in one column; only the personalisation
# prompt carries a buyer note
ETSY_HELP_TEXT_PATTERN = r"^\s*(?:personali[sz]ation|add a note)[^:]*:"
# the Wix custom text column only ever holds the buyer note
WIX_HELP_TEXT_PATTERN = r"^[^:]*:"
DEFAULT_QUANTITY = 1


class Origin(enum.Enum):
	ETSY = "etsy"
	WIX = "wix"
	BULK = "bulk"


@dataclasses.dataclass(frozen=True)
class FieldMap:
	classifier_columns: tuple[str, ...]
	name: tuple[str, ...]
	address1: tuple[str, ...]
	address2: tuple[str, ...]
	address3: tuple[str, ...]
	address4: tuple[str, ...]
	postcode: tuple[str, ...]
	message: tuple[str, ...]
	quantity: tuple[str, ...]
	date_posted: tuple[str, ...]
	sale_date: tuple[str, ...]
	fulfillment_status: tuple[str, ...]
	fulfillment_rule: str
	help_text_pattern: str | None


@dataclasses.dataclass(frozen=True)
class Order:
	origin: Origin
	name: str | None = None
	address1: str | None = None
	address2: str | None = None
	address3: str | None = None
	address4: str | None = None
	postcode: str | None = None
	message: str | None = None
	awaiting_fulfillment: bool = True
	quantity: int = DEFAULT_QUANTITY
	date_posted: str | None = None
	sale_date: str | None = None


FIELD_MAPS: dict[Origin, FieldMap] = {
	Origin.ETSY: FieldMap(
		classifier_columns=("Transaction ID",),
		name=("Ship Name", "Delivery Name", "name"),
		address1=("Ship Address1", "address1"),
		address2=("Ship Address2", "address2"),
		address3=("Ship City", "address3"),
		address4=("Ship State", "address4"),
		postcode=("Ship Zipcode", "postcode"),
		message=("Variations", "Personalisation", "message"),
		quantity=("Quantity",),
		date_posted=("Date Posted",),
		sale_date=("Sale Date",),
		fulfillment_status=(),
		fulfillment_rule=RULE_DATE_POSTED_BLANK,
		help_text_pattern=ETSY_HELP_TEXT_PATTERN,
	),
	Origin.WIX: FieldMap(
		classifier_columns=("Order #", "Order number"),
		name=("Delivery Name", "Delivery Customer", "Billing Customer", "name"),
		address1=("Delivery Address", "address1"),
		address2=("Delivery Address 2", "address2"),
		address3=("Delivery City", "address3"),
		address4=("Delivery State", "Delivery Country", "address4"),
		postcode=("Delivery Zip Code", "Delivery Postcode", "postcode"),
		message=("Custom Text", "Item's Custom Text", "message"),
		quantity=("Qty", "Quantity"),
		date_posted=(),
		sale_date=("Date",),
		fulfillment_status=("Fulfillment Status", "Fulfillment status"),
		fulfillment_rule=RULE_STATUS_NOT_FULFILLED,
		help_text_pattern=WIX_HELP_TEXT_PATTERN,
	),
	Origin.BULK: FieldMap(
		classifier_columns=(),
		name=("Delivery Name", "name"),
		address1=("address1",),
		address2=("address2",),
		address3=("address3",),
		address4=("address4",),
		postcode=("postcode",),
		message=("message",),
		quantity=("quantity",),
		date_posted=(),
		sale_date=("sale date",),
		fulfillment_status=(),
		fulfillment_rule=RULE_ALWAYS,
		help_text_pattern=None,
	),
}

# checked in this order; a row matching none of them is BULK
ORIGIN_PRIORITY = (Origin.ETSY, Origin.WIX)

ADDRESS_FIELDS = ("name", "address1", "address2", "address3", "address4", "postcode")


#============================================
def classify_origin(raw: dict[str, str]) -> Origin:
	"""
	Decide which export shape a row came from.

	Args:
		raw: Row mapping of column name to value.

	Returns:
		Origin of the row.
	"""
	for origin in ORIGIN_PRIORITY:
		field_map = FIELD_MAPS[origin]
		for column in field_map.classifier_columns:
			if column in raw:
				return origin
	return Origin.BULK


#============================================
def first_non_empty(raw: dict[str, str], columns: tuple[str, ...]) -> str | None:
	"""
	Return the first non-blank value among candidate columns.

	Args:
		raw: Row mapping.
		columns: Candidate column names, most preferred first.

	Returns:
		Value or None when every candidate is missing or blank.
	"""
	for column in columns:
		value = raw.get(column)
		if value is None:
			continue
		value = str(value)
		if not value.strip():
			continue
		return value.strip()
	return None


#============================================
def first_present(raw: dict[str, str], columns: tuple[str, ...]) -> str | None:
	"""
	Return the raw value of the first candidate column the row has.

	Args:
		raw: Row mapping.
		columns: Candidate column names, most preferred first.

	Returns:
		Unstripped value, or None when no candidate is present or the
		present one is blank.
	"""
	for column in columns:
		if column not in raw:
			continue
		value = raw[column]
		if value is None or not str(value).strip():
			return None
		return str(value)
	return None


#============================================
def strip_help_text(text: str) -> str | None:
	"""
	Drop the help text prefix a storefront puts before the buyer's note.

	Everything up to and including the first colon is removed; further
	colons belong to the note and are kept.

	Args:
		text: Raw personalisation value, e.g. "Add a note: Hi: from us".

	Returns:
		Note text or None when nothing is left.
	"""
	if ":" not in text:
		return None
	body = ":".join(text.split(":")[1:])
	if not body.strip():
		return None
	return body


#============================================
def parse_quantity(value: str | None) -> int:
	"""
	Parse a quantity cell as a base 10 integer.

	Args:
		value: Cell value.

	Returns:
		Quantity, or 1 when the value is missing, malformed, or below 1.
	"""
	if value is None:
		return DEFAULT_QUANTITY
	try:
		quantity = int(str(value).strip(), 10)
	except ValueError:
		return DEFAULT_QUANTITY
	if quantity < 1:
		return DEFAULT_QUANTITY
	return quantity


#============================================
def resolve_awaiting_fulfillment(raw: dict[str, str], field_map: FieldMap) -> bool:
	"""
	Apply an origin's fulfillment rule to a row.

	Args:
		raw: Row mapping.
		field_map: Field map for the row's origin.

	Returns:
		True if the order still has to be sent out.
	"""
	if field_map.fulfillment_rule == RULE_DATE_POSTED_BLANK:
		return first_non_empty(raw, field_map.date_posted) is None
	if field_map.fulfillment_rule == RULE_STATUS_NOT_FULFILLED:
		return first_present(raw, field_map.fulfillment_status) == WIX_AWAITING_STATUS
	return True


#============================================
def resolve_message(raw: dict[str, str], field_map: FieldMap) -> str | None:
	"""
	Pick the buyer's note out of a row.

	The first present message column is used. When the origin has help
	text, a value whose prefix does not match the help text pattern is a
	plain listing variation (e.g. "Colour:Pink") and carries no note.

	Args:
		raw: Row mapping.
		field_map: Field map for the row's origin.

	Returns:
		Message or None.
	"""
	message = first_present(raw, field_map.message)
	if message is None or field_map.help_text_pattern is None:
		return message
	if re.match(field_map.help_text_pattern, message, re.IGNORECASE) is None:
		return None
	return strip_help_text(message)


#============================================
def normalize(raw: dict[str, str]) -> Order:
	"""
	Convert one export row into a canonical Order.

	Args:
		raw: Row mapping of column name to value.

	Returns:
		Order.
	"""
	origin = classify_origin(raw)
	field_map = FIELD_MAPS[origin]

	return Order(
		origin=origin,
		name=first_non_empty(raw, field_map.name),
		address1=first_non_empty(raw, field_map.address1),
		address2=first_non_empty(raw, field_map.address2),
		address3=first_non_empty(raw, field_map.address3),
		address4=first_non_empty(raw, field_map.address4),
		postcode=first_non_empty(raw, field_map.postcode),
		message=resolve_message(raw, field_map),
		awaiting_fulfillment=resolve_awaiting_fulfillment(raw, field_map),
		quantity=parse_quantity(first_non_empty(raw, field_map.quantity)),
		date_posted=first_non_empty(raw, field_map.date_posted),
		sale_date=first_non_empty(raw, field_map.sale_date),
	)


#============================================
def normalize_rows(rows: list[dict[str, str]]) -> list[Order]:
	"""
	Normalize a list of rows.

	Args:
		rows: Row mappings.

	Returns:
		Orders in row order.
	"""
	return [normalize(raw) for raw in rows]


#============================================
def read_order_rows(path: pathlib.Path) -> list[dict[str, str]]:
	"""
	Read every row of a CSV order export.

	Args:
		path: CSV file path.

	Returns:
		List of row dicts keyed by header name.
	"""
	rows: list[dict[str, str]] = []
	with path.open("r", encoding="utf-8-sig", newline="") as handle:
		reader = csv.DictReader(handle)
		for record in reader:
			row: dict[str, str] = {}
			for key, value in record.items():
				# surplus cells beyond the header land under a None key
				if key is None:
					continue
				if value is None:
					value = ""
				row[key.strip()] = value
			rows.append(row)
	return rows
