"""
Shared configuration and constants.
"""

import dataclasses
import pathlib


POINTS_PER_PX = 0.75

MESSAGES_PER_PAGE = 6
MESSAGE_COLUMNS = 2
MESSAGE_ROWS = 3
LABELS_PER_PAGE = 14
LABEL_COLUMNS = 2
LABEL_ROWS = 7

MAX_MESSAGE_LENGTH = 250
LINE_BREAK_WEIGHT = 15
MIN_FONT_SIZE = 1.25
MAX_FONT_SIZE = 3.0

# message sheet, in CSS pixels
MESSAGE_MARGIN_PX = 15.0
MESSAGE_GAP_PX = 30.0
MESSAGE_PADDING_PX = 24.0
MESSAGE_BORDER_PX = 10.0
MESSAGE_BORDER_RADIUS_PX = 4.0
MESSAGE_BORDER_COLOR = "#FFC0CB"
MESSAGE_TEXT_COLOR = "#000000"
MESSAGE_EM_SIZE = 12.0
MESSAGE_MIN_FIT_SIZE = 8.0

# label sheet, in CSS pixels
LABEL_MARGIN_TOP_PX = 45.0
LABEL_MARGIN_RIGHT_PX = 12.0
LABEL_MARGIN_BOTTOM_PX = 42.0
LABEL_MARGIN_LEFT_PX = 12.0
LABEL_GAP_PX = 10.0
LABEL_PADDING_PX = 16.0
LABEL_TEXT_COLOR = "#000000"
LABEL_FONT_SIZE = 11.0
LABEL_MIN_FIT_SIZE = 6.0

DEFAULT_FONT_REGULAR = "Helvetica"
OUTLINE_COLOR = "#B3B3B3"
OUTLINE_WIDTH = 0.3
LINE_LEADING = 1.2
FIT_STEP = 0.5
PROGRESS_BAR_WIDTH = 20
DEFAULT_OUTPUT_DIR = "pdf"
MESSAGE_PDF_PREFIX = "hey-sweetie-messages"
LABEL_PDF_PREFIX = "hey-sweetie-labels"

SELECTION_MODE_FULFILLMENT = "fulfillment"
SELECTION_MODE_DATE_WINDOW = "date-window"
SELECTION_MODES = (SELECTION_MODE_FULFILLMENT, SELECTION_MODE_DATE_WINDOW)


@dataclasses.dataclass(frozen=True)
class LayoutConfig:
	messages_per_page: int = MESSAGES_PER_PAGE
	labels_per_page: int = LABELS_PER_PAGE
	max_message_length: int = MAX_MESSAGE_LENGTH
	line_break_weight: int = LINE_BREAK_WEIGHT
	min_font_size: float = MIN_FONT_SIZE
	max_font_size: float = MAX_FONT_SIZE


@dataclasses.dataclass(frozen=True)
class SelectionOptions:
	mode: str = SELECTION_MODE_FULFILLMENT
	include_today: bool = False


@dataclasses.dataclass
class DocumentConfig:
	page_width: float
	page_height: float
	columns: int
	rows: int
	margin_top: float
	margin_right: float
	margin_bottom: float
	margin_left: float
	h_gap: float
	v_gap: float
	padding: float
	border_width: float
	border_color: str | None
	border_radius: float
	text_color: str
	font_name: str
	em_size: float
	base_font_size: float
	min_fit_size: float
	text_align_horizontal: str
	text_align_vertical: str
	draw_outlines: bool


@dataclasses.dataclass
class RenderResult:
	output_path: pathlib.Path
	total_cells: int
	pages: int
	cells_per_page: int
	clamped_cells: int


#============================================
def px_to_points(value: float) -> float:
	"""
	Convert CSS pixels (96 per inch) to points.

	Args:
		value: Pixel value.

	Returns:
		Points value.
	"""
	return value * POINTS_PER_PX
