"""
Pagination and font sizing for message and label sheets.
"""

# Standard Library
import dataclasses
import html
import re

# local repo modules
import hey_sweetie_printer as hsp
import hey_sweetie_printer.config
import hey_sweetie_printer.orders


Order = hsp.orders.Order
LayoutConfig = hsp.config.LayoutConfig
ADDRESS_FIELDS = hsp.orders.ADDRESS_FIELDS

LINE_BREAK_RUN = re.compile(r"\n{2,}")


@dataclasses.dataclass(frozen=True)
class MessageCell:
	text: str
	font_size: float


@dataclasses.dataclass(frozen=True)
class LabelCell:
	text: str


@dataclasses.dataclass(frozen=True)
class Page:
	number: int
	cells: tuple


#============================================
def chunk(items: list, size: int) -> list[list]:
	"""
	Split a sequence into consecutive groups.

	Args:
		items: Items in order.
		size: Group size.

	Returns:
		Groups of `size` items; the last one may be shorter.
	"""
	if size < 1:
		raise ValueError(f"Chunk size must be at least 1, got {size}")
	return [list(items[index:index + size]) for index in range(0, len(items), size)]


#============================================
def clean_message(text: str) -> str:
	"""
	Unescape HTML entities and collapse blank lines in a message.

	Args:
		text: Raw message text.

	Returns:
		Cleaned text using "\\n" line breaks.
	"""
	text = text.replace("\r\n", "\n").replace("\r", "\n")
	text = html.unescape(text)
	text = LINE_BREAK_RUN.sub("\n", text)
	return text


#============================================
def count_line_breaks(text: str) -> int:
	return text.count("\n")


#============================================
def compute_length_score(text: str, config: LayoutConfig) -> int:
	"""
	Estimate how much room a message takes up.

	Each line break costs as much vertical space as `line_break_weight`
	characters. The score saturates at `max_message_length`.

	Args:
		text: Cleaned message text.
		config: Layout configuration.

	Returns:
		Effective length score.
	"""
	raw_score = len(text) + config.line_break_weight * count_line_breaks(text)
	return min(config.max_message_length, raw_score)


#============================================
def compute_font_size(score: float, config: LayoutConfig) -> float:
	"""
	Map a length score onto the font size range, longest text smallest.

	Args:
		score: Effective length score.
		config: Layout configuration.

	Returns:
		Font size in em, within [min_font_size, max_font_size].
	"""
	span = config.max_font_size - config.min_font_size
	ratio = (config.max_message_length - score) / config.max_message_length
	font_size = ratio * span + config.min_font_size
	return max(config.min_font_size, min(font_size, config.max_font_size))


#============================================
def build_message_cell(text: str, config: LayoutConfig) -> MessageCell:
	message = clean_message(text)
	score = compute_length_score(message, config)
	return MessageCell(text=message, font_size=compute_font_size(score, config))


#============================================
def build_message_pages(orders: list[Order], config: LayoutConfig) -> list[Page]:
	"""
	Lay out the personalised messages of the given orders.

	Orders without a message are skipped.

	Args:
		orders: Expanded orders.
		config: Layout configuration.

	Returns:
		Message pages in order.
	"""
	cells = [
		build_message_cell(order.message, config)
		for order in orders
		if order.message
	]
	groups = chunk(cells, config.messages_per_page)
	return [Page(number=index, cells=tuple(group)) for index, group in enumerate(groups, start=1)]


#============================================
def build_label_text(order: Order) -> str:
	"""
	Join the address fields of an order, skipping blank ones.

	Args:
		order: Order.

	Returns:
		Label text, one field per line.
	"""
	lines: list[str] = []
	for field_name in ADDRESS_FIELDS:
		value = getattr(order, field_name)
		if value:
			lines.append(value)
	return "\n".join(lines)


#============================================
def build_label_pages(orders: list[Order], config: LayoutConfig) -> list[Page]:
	"""
	Lay out one address label per order.

	Args:
		orders: Expanded orders.
		config: Layout configuration.

	Returns:
		Label pages in order.
	"""
	cells = [LabelCell(text=build_label_text(order)) for order in orders]
	groups = chunk(cells, config.labels_per_page)
	return [Page(number=index, cells=tuple(group)) for index, group in enumerate(groups, start=1)]
