"""
Pytest configuration for local imports and shared order fixtures.
"""

# Standard Library
import csv
import os
import pathlib
import sys

# PIP3 modules
import pytest

ETSY_COLUMNS = [
	"Sale Date",
	"Item Name",
	"Quantity",
	"Transaction ID",
	"Date Posted",
	"Ship Name",
	"Ship Address1",
	"Ship Address2",
	"Ship City",
	"Ship State",
	"Ship Zipcode",
	"Variations",
]


#============================================
def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()


#============================================
def write_csv(path: pathlib.Path, columns: list[str], rows: list[dict[str, str]]) -> pathlib.Path:
	"""
	Write rows to a CSV file with a header.

	Args:
		path: Output path.
		columns: Header columns.
		rows: Row dicts.

	Returns:
		The written path.
	"""
	with path.open("w", encoding="utf-8", newline="") as handle:
		writer = csv.DictWriter(handle, fieldnames=columns)
		writer.writeheader()
		for row in rows:
			writer.writerow(row)
	return path


#============================================
@pytest.fixture
def etsy_rows() -> list[dict[str, str]]:
	"""
	Three Etsy rows: two unposted personalised orders of two units each,
	and one posted order with no personalisation.
	"""
	return [
		{
			"Sale Date": "10/10/26",
			"Item Name": "Sweetie box",
			"Quantity": "2",
			"Transaction ID": "3001",
			"Date Posted": "",
			"Ship Name": "Ann Example",
			"Ship Address1": "1 High Street",
			"Ship Address2": "",
			"Ship City": "Leeds",
			"Ship State": "West Yorkshire",
			"Ship Zipcode": "LS1 1AA",
			"Variations": "Personalisation:Happy Birthday Gran",
		},
		{
			"Sale Date": "10/11/26",
			"Item Name": "Sweetie box",
			"Quantity": "2",
			"Transaction ID": "3002",
			"Date Posted": "",
			"Ship Name": "Bea Sample",
			"Ship Address1": "22 Mill Lane",
			"Ship Address2": "Flat 3",
			"Ship City": "York",
			"Ship State": "",
			"Ship Zipcode": "YO1 2BB",
			"Variations": "Personalisation:Congrats!\n\n\nLove, Tom &amp; Sue",
		},
		{
			"Sale Date": "10/09/26",
			"Item Name": "Sweetie box",
			"Quantity": "1",
			"Transaction ID": "3003",
			"Date Posted": "10/12/26",
			"Ship Name": "Cy Posted",
			"Ship Address1": "9 Station Road",
			"Ship Address2": "",
			"Ship City": "Hull",
			"Ship State": "",
			"Ship Zipcode": "HU1 3CC",
			"Variations": "",
		},
	]


#============================================
@pytest.fixture
def etsy_csv(tmp_path: pathlib.Path, etsy_rows: list[dict[str, str]]) -> pathlib.Path:
	"""
	The Etsy rows written to a CSV export.
	"""
	return write_csv(tmp_path / "EtsySoldOrderItems.csv", ETSY_COLUMNS, etsy_rows)
