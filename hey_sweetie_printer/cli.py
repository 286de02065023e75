"""
CLI entry points for printing order messages and address labels.
"""

# Standard Library
import argparse
import dataclasses
import datetime
import json
import pathlib
import time

# PIP3 modules
import reportlab.lib.pagesizes

# local repo modules
import hey_sweetie_printer as hsp
import hey_sweetie_printer.config
import hey_sweetie_printer.layout
import hey_sweetie_printer.orders
import hey_sweetie_printer.render
import hey_sweetie_printer.selection


DocumentConfig = hsp.config.DocumentConfig
LayoutConfig = hsp.config.LayoutConfig
RenderResult = hsp.config.RenderResult
SelectionOptions = hsp.config.SelectionOptions
px_to_points = hsp.config.px_to_points

SELECTION_MODE_FULFILLMENT = hsp.config.SELECTION_MODE_FULFILLMENT
SELECTION_MODE_DATE_WINDOW = hsp.config.SELECTION_MODE_DATE_WINDOW
DEFAULT_OUTPUT_DIR = hsp.config.DEFAULT_OUTPUT_DIR
DEFAULT_FONT_REGULAR = hsp.config.DEFAULT_FONT_REGULAR
MESSAGE_PDF_PREFIX = hsp.config.MESSAGE_PDF_PREFIX
LABEL_PDF_PREFIX = hsp.config.LABEL_PDF_PREFIX


@dataclasses.dataclass
class PipelineSummary:
	rows: int
	orders: int
	selected: int
	message_pages: int
	label_pages: int
	message_path: pathlib.Path | None
	label_path: pathlib.Path | None


#============================================
def build_selection_options(args: argparse.Namespace) -> SelectionOptions:
	"""
	Build selection options from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		SelectionOptions.
	"""
	mode = args.mode
	if args.include_today:
		mode = SELECTION_MODE_DATE_WINDOW
	return SelectionOptions(mode=mode, include_today=args.include_today)


#============================================
def build_message_config(args: argparse.Namespace) -> DocumentConfig:
	"""
	Build the message sheet config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		DocumentConfig.
	"""
	page_width, page_height = reportlab.lib.pagesizes.A4
	font_name = DEFAULT_FONT_REGULAR
	if args.font_path:
		font_name = hsp.render.register_font(pathlib.Path(args.font_path))
	margin = px_to_points(hsp.config.MESSAGE_MARGIN_PX)
	gap = px_to_points(hsp.config.MESSAGE_GAP_PX)
	return DocumentConfig(
		page_width=page_width,
		page_height=page_height,
		columns=hsp.config.MESSAGE_COLUMNS,
		rows=hsp.config.MESSAGE_ROWS,
		margin_top=margin,
		margin_right=margin,
		margin_bottom=margin,
		margin_left=margin,
		h_gap=gap,
		v_gap=gap,
		padding=px_to_points(hsp.config.MESSAGE_PADDING_PX),
		border_width=px_to_points(hsp.config.MESSAGE_BORDER_PX),
		border_color=hsp.config.MESSAGE_BORDER_COLOR,
		border_radius=px_to_points(hsp.config.MESSAGE_BORDER_RADIUS_PX),
		text_color=hsp.config.MESSAGE_TEXT_COLOR,
		font_name=font_name,
		em_size=hsp.config.MESSAGE_EM_SIZE,
		base_font_size=hsp.config.MESSAGE_EM_SIZE,
		min_fit_size=hsp.config.MESSAGE_MIN_FIT_SIZE,
		text_align_horizontal="CENTER",
		text_align_vertical="CENTER",
		draw_outlines=False,
	)


#============================================
def build_label_config(args: argparse.Namespace) -> DocumentConfig:
	"""
	Build the address label sheet config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		DocumentConfig.
	"""
	page_width, page_height = reportlab.lib.pagesizes.A4
	gap = px_to_points(hsp.config.LABEL_GAP_PX)
	return DocumentConfig(
		page_width=page_width,
		page_height=page_height,
		columns=hsp.config.LABEL_COLUMNS,
		rows=hsp.config.LABEL_ROWS,
		margin_top=px_to_points(hsp.config.LABEL_MARGIN_TOP_PX),
		margin_right=px_to_points(hsp.config.LABEL_MARGIN_RIGHT_PX),
		margin_bottom=px_to_points(hsp.config.LABEL_MARGIN_BOTTOM_PX),
		margin_left=px_to_points(hsp.config.LABEL_MARGIN_LEFT_PX),
		h_gap=gap,
		v_gap=0.0,
		padding=px_to_points(hsp.config.LABEL_PADDING_PX),
		border_width=0.0,
		border_color=None,
		border_radius=0.0,
		text_color=hsp.config.LABEL_TEXT_COLOR,
		font_name=DEFAULT_FONT_REGULAR,
		em_size=hsp.config.LABEL_FONT_SIZE,
		base_font_size=hsp.config.LABEL_FONT_SIZE,
		min_fit_size=hsp.config.LABEL_MIN_FIT_SIZE,
		text_align_horizontal="LEFT",
		text_align_vertical="CENTER",
		draw_outlines=args.draw_outlines,
	)


#============================================
def format_timestamp(now: datetime.datetime) -> str:
	"""
	Format a timestamp for use in file names.

	Args:
		now: Time to format.

	Returns:
		String like "2026-10-17T09-30-00".
	"""
	return now.strftime("%Y-%m-%dT%H:%M:%S").replace(":", "-")


#============================================
def build_output_paths(
	output_dir: pathlib.Path,
	now: datetime.datetime,
) -> tuple[pathlib.Path, pathlib.Path]:
	"""
	Build timestamped output paths and create the output directory.

	Args:
		output_dir: Output directory.
		now: Run time.

	Returns:
		Tuple of (message_path, label_path).
	"""
	output_dir.mkdir(parents=True, exist_ok=True)
	stamp = format_timestamp(now)
	message_path = output_dir / f"{MESSAGE_PDF_PREFIX}_{stamp}.pdf"
	label_path = output_dir / f"{LABEL_PDF_PREFIX}_{stamp}.pdf"
	return (message_path, label_path)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Optional argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Print order messages and address labels to PDF.")
	parser.add_argument("input_path", help="Order export CSV (Etsy, Wix, or bulk sheet).")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output-dir", dest="output_dir", default=DEFAULT_OUTPUT_DIR, help="Output directory.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-f", "--fulfillment", dest="mode", action="store_const", const=SELECTION_MODE_FULFILLMENT, help="Select orders awaiting fulfillment.")
	behavior_group.add_argument("-w", "--date-window", dest="mode", action="store_const", const=SELECTION_MODE_DATE_WINDOW, help="Select unposted orders sold before today.")
	behavior_group.add_argument("-t", "--include-today", dest="include_today", action="store_true", help="Include orders sold today (implies --date-window).")
	behavior_group.add_argument("-T", "--no-include-today", dest="include_today", action="store_false", help="Exclude orders sold today.")
	behavior_group.add_argument("-d", "--draw-outlines", dest="draw_outlines", action="store_true", help="Draw label outlines.")
	behavior_group.add_argument("-D", "--no-draw-outlines", dest="draw_outlines", action="store_false", help="Disable label outlines.")
	behavior_group.add_argument("--font", dest="font_path", default=None, help="TrueType font for messages.")
	behavior_group.add_argument(
		"--stop-before-rendering",
		dest="stop_before_rendering",
		action="store_true",
		help="Stop after laying out pages (skip writing PDFs).",
	)

	parser.set_defaults(
		mode=SELECTION_MODE_FULFILLMENT,
		include_today=False,
		draw_outlines=False,
		stop_before_rendering=False,
	)

	args = parser.parse_args(argv)
	return args


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	input_path: pathlib.Path,
	options: SelectionOptions,
	summary: PipelineSummary,
	results: list[RenderResult],
	layout_config: LayoutConfig,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		input_path: Input CSV path.
		options: Selection options used.
		summary: Pipeline summary.
		results: Render results for the written documents.
		layout_config: Layout configuration.
	"""
	data = {
		"input": str(input_path),
		"selection": {
			"mode": options.mode,
			"include_today": options.include_today,
		},
		"rows": summary.rows,
		"orders": summary.orders,
		"selected": summary.selected,
		"message_pages": summary.message_pages,
		"label_pages": summary.label_pages,
		"documents": [
			{
				"path": str(result.output_path),
				"cells": result.total_cells,
				"pages": result.pages,
				"cells_per_page": result.cells_per_page,
				"clamped_cells": result.clamped_cells,
			}
			for result in results
		],
		"layout": dataclasses.asdict(layout_config),
	}
	manifest_path.parent.mkdir(parents=True, exist_ok=True)
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)


#============================================
def print_render_result(name: str, result: RenderResult) -> None:
	print(f"{name} pages written: {result.pages}")
	print(f"{name} cells printed: {result.total_cells}")
	if result.clamped_cells > 0:
		print(f"{name} min font size clamps: {result.clamped_cells} cells")
	print(f"{name} PDF: {result.output_path}")


#============================================
def run_pipeline(
	args: argparse.Namespace,
	now: datetime.datetime | None = None,
) -> PipelineSummary:
	"""
	Run the full pipeline from order export to PDF sheets.

	Args:
		args: Parsed argparse namespace.
		now: Run time override, defaults to the local clock.

	Returns:
		PipelineSummary.
	"""
	if now is None:
		now = datetime.datetime.now()
	input_path = pathlib.Path(args.input_path)
	if not input_path.is_file():
		raise FileNotFoundError(f"Order export not found: {input_path}")
	options = build_selection_options(args)
	layout_config = LayoutConfig()

	print("Order messages and labels pipeline")
	print(f"Input CSV: {input_path}")
	print(f"Output directory: {args.output_dir}")
	print(f"Selection mode: {options.mode}")
	if options.mode == SELECTION_MODE_DATE_WINDOW:
		print(f"Include today: {options.include_today}")
	print(f"Draw outlines: {args.draw_outlines}")
	if args.stop_before_rendering:
		print("Stop before rendering: True")

	start_time = time.perf_counter()
	rows = hsp.orders.read_order_rows(input_path)
	print(f"Rows read: {len(rows)}")
	orders = hsp.orders.normalize_rows(rows)
	selected = hsp.selection.select_orders(orders, options, now=now)
	print(f"Orders selected: {len(selected)}")

	summary = PipelineSummary(
		rows=len(rows),
		orders=len(orders),
		selected=len(selected),
		message_pages=0,
		label_pages=0,
		message_path=None,
		label_path=None,
	)
	if not selected:
		print("Nothing to print.")
		return summary

	layout_start = time.perf_counter()
	message_pages = hsp.layout.build_message_pages(selected, layout_config)
	label_pages = hsp.layout.build_label_pages(selected, layout_config)
	layout_end = time.perf_counter()
	summary.message_pages = len(message_pages)
	summary.label_pages = len(label_pages)
	message_count = sum(len(page.cells) for page in message_pages)
	print(f"{message_count} messages found on {len(message_pages)} pages")
	print(f"{len(selected)} labels found on {len(label_pages)} pages")

	if args.stop_before_rendering:
		print("Stopping before rendering documents.")
		return summary

	render_start = time.perf_counter()
	message_path, label_path = build_output_paths(pathlib.Path(args.output_dir), now)
	results: list[RenderResult] = []
	if message_pages:
		message_config = build_message_config(args)
		result = hsp.render.render_message_pages(message_pages, message_path, message_config)
		print_render_result("Message", result)
		results.append(result)
		summary.message_path = message_path
	else:
		print("No messages to print.")

	label_config = build_label_config(args)
	result = hsp.render.render_label_pages(label_pages, label_path, label_config)
	print_render_result("Label", result)
	results.append(result)
	summary.label_path = label_path
	render_end = time.perf_counter()

	if args.manifest_path:
		manifest_path = pathlib.Path(args.manifest_path)
		write_manifest(manifest_path, input_path, options, summary, results, layout_config)
		print(f"Manifest written: {manifest_path}")

	total_time = time.perf_counter() - start_time
	print(
		"Timing: layout={:.2f}s render={:.2f}s total={:.2f}s".format(
			layout_end - layout_start,
			render_end - render_start,
			total_time,
		)
	)
	return summary


#============================================
def main() -> None:
	"""
	Main entry point.
	"""
	args = parse_args()
	run_pipeline(args)
