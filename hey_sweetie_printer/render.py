"""
Rendering message and label pages to PDF.
"""

# Standard Library
import pathlib

# PIP3 modules
import reportlab.lib.utils
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfbase.ttfonts
import reportlab.pdfgen.canvas

# local repo modules
import hey_sweetie_printer as hsp
import hey_sweetie_printer.config
import hey_sweetie_printer.layout


Page = hsp.layout.Page
DocumentConfig = hsp.config.DocumentConfig
RenderResult = hsp.config.RenderResult

OUTLINE_COLOR = hsp.config.OUTLINE_COLOR
OUTLINE_WIDTH = hsp.config.OUTLINE_WIDTH
LINE_LEADING = hsp.config.LINE_LEADING
FIT_STEP = hsp.config.FIT_STEP
PROGRESS_BAR_WIDTH = hsp.config.PROGRESS_BAR_WIDTH


#============================================
def compute_align_offset(available: float, used: float, align: str) -> float:
	"""
	Compute an alignment offset.

	Args:
		available: Available dimension.
		used: Dimension taken by the content.
		align: Alignment string.

	Returns:
		Offset in points.
	"""
	normalized = align.strip().upper()
	if normalized in ("LEFT", "BOTTOM"):
		return 0.0
	if normalized in ("RIGHT", "TOP"):
		return max(0.0, available - used)
	return max(0.0, (available - used) / 2.0)


#============================================
def parse_hex_color(value: str) -> tuple[float, float, float]:
	"""
	Parse a hex color string into RGB floats.

	Args:
		value: Color string like "#AABBCC".

	Returns:
		Tuple of (r, g, b) in 0.0-1.0 range.
	"""
	if not value or not value.startswith("#") or len(value) != 7:
		return (0.0, 0.0, 0.0)
	red = int(value[1:3], 16) / 255.0
	green = int(value[3:5], 16) / 255.0
	blue = int(value[5:7], 16) / 255.0
	return (red, green, blue)


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"{prefix} [{bar}] {current}/{total} ({percent}%)", end="\r")


#============================================
def register_font(path: pathlib.Path) -> str:
	"""
	Register a TrueType font file with ReportLab.

	Args:
		path: Font file path.

	Returns:
		Registered font name (the file stem).
	"""
	if not path.exists():
		raise FileNotFoundError(f"Font file not found: {path}")
	font_name = path.stem
	font = reportlab.pdfbase.ttfonts.TTFont(font_name, str(path))
	reportlab.pdfbase.pdfmetrics.registerFont(font)
	return font_name


#============================================
def compute_cell_size(config: DocumentConfig) -> tuple[float, float]:
	"""
	Compute the size of one grid cell.

	Args:
		config: Document configuration.

	Returns:
		Tuple of (width, height).
	"""
	usable_width = config.page_width - config.margin_left - config.margin_right
	usable_height = config.page_height - config.margin_top - config.margin_bottom
	cell_width = (usable_width - (config.columns - 1) * config.h_gap) / config.columns
	cell_height = (usable_height - (config.rows - 1) * config.v_gap) / config.rows
	return (cell_width, cell_height)


#============================================
def compute_cell_box(config: DocumentConfig, slot: int) -> tuple[float, float, float, float]:
	"""
	Compute the bounding box for a grid slot.

	Slots fill each row left to right, rows top to bottom.

	Args:
		config: Document configuration.
		slot: Slot index on the page.

	Returns:
		Tuple of (x0, y0, x1, y1) in PDF coordinates.
	"""
	cell_width, cell_height = compute_cell_size(config)
	row = slot // config.columns
	col = slot % config.columns
	x0 = config.margin_left + col * (cell_width + config.h_gap)
	y1 = config.page_height - config.margin_top - row * (cell_height + config.v_gap)
	return (x0, y1 - cell_height, x0 + cell_width, y1)


#============================================
def compute_content_box(
	box: tuple[float, float, float, float],
	config: DocumentConfig,
) -> tuple[float, float, float, float]:
	"""
	Shrink a cell box by its border and padding.

	Args:
		box: Cell box.
		config: Document configuration.

	Returns:
		Content box (x0, y0, x1, y1).
	"""
	inset = config.border_width + config.padding
	return (box[0] + inset, box[1] + inset, box[2] - inset, box[3] - inset)


#============================================
def compute_leading(size: float) -> float:
	return size * LINE_LEADING


#============================================
def break_long_line(line: str, font_name: str, font_size: float, max_width: float) -> list[str]:
	"""
	Break a line that is wider than the box between characters.

	Args:
		line: Line with no spaces left to wrap on.
		font_name: ReportLab font name.
		font_size: Font size in points.
		max_width: Available width in points.

	Returns:
		Pieces no wider than max_width (a piece always has one character).
	"""
	pieces: list[str] = []
	current = ""
	for char in line:
		candidate = current + char
		width = reportlab.pdfbase.pdfmetrics.stringWidth(candidate, font_name, font_size)
		if current and width > max_width:
			pieces.append(current)
			current = char
			continue
		current = candidate
	if current:
		pieces.append(current)
	return pieces


#============================================
def wrap_text(text: str, font_name: str, font_size: float, max_width: float) -> list[str]:
	"""
	Word wrap text, keeping its explicit line breaks.

	Args:
		text: Text with "\\n" line breaks.
		font_name: ReportLab font name.
		font_size: Font size in points.
		max_width: Available width in points.

	Returns:
		Wrapped lines.
	"""
	lines: list[str] = []
	for paragraph in text.split("\n"):
		wrapped = reportlab.lib.utils.simpleSplit(paragraph, font_name, font_size, max_width)
		if not wrapped:
			lines.append("")
			continue
		for line in wrapped:
			width = reportlab.pdfbase.pdfmetrics.stringWidth(line, font_name, font_size)
			if width > max_width:
				lines.extend(break_long_line(line, font_name, font_size, max_width))
				continue
			lines.append(line)
	return lines


#============================================
def fit_text_lines(
	text: str,
	font_name: str,
	font_size: float,
	min_font_size: float,
	max_width: float,
	max_height: float,
) -> tuple[list[str], float, bool]:
	"""
	Wrap text and shrink it until the block fits the box.

	Args:
		text: Text to fit.
		font_name: ReportLab font name.
		font_size: Starting font size in points.
		min_font_size: Smallest allowed size.
		max_width: Available width.
		max_height: Available height.

	Returns:
		Tuple of (lines, font_size, clamped) where clamped is True when the
		text still overflows at the minimum size.
	"""
	size = font_size
	while True:
		lines = wrap_text(text, font_name, size, max_width)
		text_height = size + compute_leading(size) * (len(lines) - 1)
		text_width = max(
			reportlab.pdfbase.pdfmetrics.stringWidth(line, font_name, size)
			for line in lines
		)
		fits = text_height <= max_height and text_width <= max_width
		if fits:
			return (lines, size, False)
		if size <= min_font_size:
			return (lines, size, True)
		scale = min(max_height / text_height, max_width / text_width if text_width > 0 else 1.0)
		size = max(min_font_size, min(size - FIT_STEP, size * scale))


#============================================
def draw_text_block(
	pdf: reportlab.pdfgen.canvas.Canvas,
	lines: list[str],
	box: tuple[float, float, float, float],
	font_name: str,
	font_size: float,
	config: DocumentConfig,
) -> None:
	"""
	Draw wrapped lines inside a content box.

	Args:
		pdf: ReportLab canvas.
		lines: Lines to draw, top first.
		box: Content box.
		font_name: ReportLab font name.
		font_size: Font size in points.
		config: Document configuration.
	"""
	pdf.setFont(font_name, font_size)
	color = parse_hex_color(config.text_color)
	pdf.setFillColorRGB(color[0], color[1], color[2])

	leading = compute_leading(font_size)
	text_height = font_size + leading * (len(lines) - 1)
	box_width = box[2] - box[0]
	box_height = box[3] - box[1]
	block_top = box[1] + compute_align_offset(box_height, text_height, config.text_align_vertical) + text_height

	for index, line in enumerate(lines):
		line_width = pdf.stringWidth(line, font_name, font_size)
		text_x = box[0] + compute_align_offset(box_width, line_width, config.text_align_horizontal)
		text_y = block_top - font_size - index * leading
		pdf.drawString(text_x, text_y, line)


#============================================
def draw_cell_border(
	pdf: reportlab.pdfgen.canvas.Canvas,
	box: tuple[float, float, float, float],
	config: DocumentConfig,
) -> None:
	"""
	Draw a rounded border just inside a cell.

	Args:
		pdf: ReportLab canvas.
		box: Cell box.
		config: Document configuration.
	"""
	if not config.border_color or config.border_width <= 0.0:
		return
	color = parse_hex_color(config.border_color)
	pdf.setStrokeColorRGB(color[0], color[1], color[2])
	pdf.setLineWidth(config.border_width)
	half = config.border_width / 2.0
	pdf.roundRect(
		box[0] + half,
		box[1] + half,
		box[2] - box[0] - config.border_width,
		box[3] - box[1] - config.border_width,
		config.border_radius,
		stroke=1,
		fill=0,
	)


#============================================
def draw_outlines(pdf: reportlab.pdfgen.canvas.Canvas, config: DocumentConfig) -> None:
	"""
	Draw thin outlines around every slot on the current page.

	Args:
		pdf: ReportLab canvas.
		config: Document configuration.
	"""
	color = parse_hex_color(OUTLINE_COLOR)
	pdf.setLineWidth(OUTLINE_WIDTH)
	pdf.setStrokeColorRGB(color[0], color[1], color[2])
	for slot in range(config.columns * config.rows):
		x0, y0, x1, y1 = compute_cell_box(config, slot)
		pdf.rect(x0, y0, x1 - x0, y1 - y0, stroke=1, fill=0)


#============================================
def render_pages(
	pages: list[Page],
	output_path: pathlib.Path,
	config: DocumentConfig,
	font_sizes: list[list[float]],
	prefix: str,
) -> RenderResult:
	"""
	Draw a page sequence into one PDF file.

	Args:
		pages: Layout pages.
		output_path: Output PDF path.
		config: Document configuration.
		font_sizes: Starting font size in points for each cell, per page.
		prefix: Progress label.

	Returns:
		RenderResult.
	"""
	if not pages:
		raise ValueError("No pages to render")
	cells_per_page = config.columns * config.rows
	for page in pages:
		if len(page.cells) > cells_per_page:
			raise ValueError(
				f"Page {page.number} has {len(page.cells)} cells, grid holds {cells_per_page}"
			)

	pdf = reportlab.pdfgen.canvas.Canvas(
		str(output_path),
		pagesize=(config.page_width, config.page_height),
	)
	total_cells = 0
	clamped_cells = 0
	print_progress(prefix, 0, len(pages))
	for page_index, page in enumerate(pages):
		if config.draw_outlines:
			draw_outlines(pdf, config)
		for slot, cell in enumerate(page.cells):
			box = compute_cell_box(config, slot)
			draw_cell_border(pdf, box, config)
			total_cells += 1
			if not cell.text:
				continue
			content = compute_content_box(box, config)
			lines, size, clamped = fit_text_lines(
				cell.text,
				config.font_name,
				font_sizes[page_index][slot],
				config.min_fit_size,
				content[2] - content[0],
				content[3] - content[1],
			)
			if clamped:
				clamped_cells += 1
			draw_text_block(pdf, lines, content, config.font_name, size, config)
		pdf.showPage()
		print_progress(prefix, page_index + 1, len(pages))
	print()
	pdf.save()

	return RenderResult(
		output_path=output_path,
		total_cells=total_cells,
		pages=len(pages),
		cells_per_page=cells_per_page,
		clamped_cells=clamped_cells,
	)


#============================================
def render_message_pages(
	pages: list[Page],
	output_path: pathlib.Path,
	config: DocumentConfig,
) -> RenderResult:
	"""
	Render message pages, sizing each message from its em font size.

	Args:
		pages: Message pages.
		output_path: Output PDF path.
		config: Document configuration.

	Returns:
		RenderResult.
	"""
	font_sizes = [[cell.font_size * config.em_size for cell in page.cells] for page in pages]
	return render_pages(pages, output_path, config, font_sizes, "Messages")


#============================================
def render_label_pages(
	pages: list[Page],
	output_path: pathlib.Path,
	config: DocumentConfig,
) -> RenderResult:
	"""
	Render address label pages at the base font size.

	Args:
		pages: Label pages.
		output_path: Output PDF path.
		config: Document configuration.

	Returns:
		RenderResult.
	"""
	font_sizes = [[config.base_font_size for _cell in page.cells] for page in pages]
	return render_pages(pages, output_path, config, font_sizes, "Labels")
