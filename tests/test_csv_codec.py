# tests/test_csv_codec.py

"""Tests for CSV encoding, decoding and file I/O."""

import asyncio
import csv
import io
import tempfile
import unittest
from datetime import date
from pathlib import Path

from src.models.product import Product
from src.storage.csv_codec import (
    CsvImportError,
    EmptyInventoryError,
    decode_rows,
    encode_products,
    export_filename,
    read_import_file,
    write_export,
)

_HEADER = "ID,Name,SKU,Category,Quantity,Unit Price,Min Stock,Description"


def _sample_products() -> list[Product]:
    """Return a small list of test products."""
    return [
        Product(
            id=1,
            name="Widget",
            sku="W1",
            category="Tools",
            quantity=5,
            price=2.5,
            min_stock=10,
            description="Small",
        ),
        Product(
            id=2,
            name="Gadget",
            sku="G1",
            category="Toys",
            quantity=30,
            price=1.0,
            min_stock=5,
            description="",
        ),
    ]


class TestEncodeProducts(unittest.TestCase):
    """encode_products behaviour."""

    def test_empty_raises(self) -> None:
        """Exporting nothing is refused."""
        with self.assertRaises(EmptyInventoryError):
            encode_products([])

    def test_header_row(self) -> None:
        """The first line is the plain header."""
        text = encode_products(_sample_products())
        self.assertEqual(text.split("\n")[0], _HEADER)

    def test_data_fields_all_quoted(self) -> None:
        """Every data field is wrapped in double quotes."""
        text = encode_products(_sample_products())
        first_row = text.split("\n")[1]
        self.assertEqual(
            first_row,
            '"1","Widget","W1","Tools","5","2.5","10","Small"',
        )

    def test_one_row_per_product(self) -> None:
        """Header plus one line per product, newline-terminated."""
        text = encode_products(_sample_products())
        self.assertTrue(text.endswith("\n"))
        self.assertEqual(len(text.strip().split("\n")), 3)

    def test_embedded_quotes_and_commas_escaped(self) -> None:
        """Delimiters inside fields survive a csv.reader pass."""
        product = Product(
            id=9,
            name='Bolt, 5" long',
            sku="B5",
            description="line one\nline two",
        )
        text = encode_products([product])
        rows = list(csv.reader(io.StringIO(text)))
        self.assertEqual(rows[1][1], 'Bolt, 5" long')
        self.assertEqual(rows[1][7], "line one\nline two")


class TestDecodeRows(unittest.TestCase):
    """decode_rows behaviour."""

    def test_skips_header(self) -> None:
        """A header-only file yields no rows."""
        self.assertEqual(decode_rows(_HEADER + "\n"), [])

    def test_empty_text(self) -> None:
        """Empty input yields no rows."""
        self.assertEqual(decode_rows(""), [])

    def test_positional_columns(self) -> None:
        """Columns map to fields by position, ignoring the ID column."""
        text = _HEADER + '\n"99","Widget","W1","Tools","5","2.5","10","Hi"\n'
        rows = decode_rows(text)
        self.assertEqual(
            rows,
            [
                {
                    "name": "Widget",
                    "sku": "W1",
                    "category": "Tools",
                    "quantity": "5",
                    "price": "2.5",
                    "min_stock": "10",
                    "description": "Hi",
                }
            ],
        )

    def test_unquoted_fields(self) -> None:
        """Plain unquoted spreadsheet rows are accepted."""
        rows = decode_rows(_HEADER + "\n1,Nut,N1,Parts,3,0.1,1,\n")
        self.assertEqual(rows[0]["name"], "Nut")
        self.assertEqual(rows[0]["description"], "")

    def test_blank_lines_skipped(self) -> None:
        """Blank and whitespace-only lines are ignored."""
        text = _HEADER + "\n\n1,A,A1\n   \n2,B,B1\n"
        rows = decode_rows(text)
        self.assertEqual([r["name"] for r in rows], ["A", "B"])

    def test_short_rows_padded(self) -> None:
        """Missing trailing columns come back as empty strings."""
        rows = decode_rows(_HEADER + "\n1,A,A1\n")
        self.assertEqual(rows[0]["category"], "")
        self.assertEqual(rows[0]["quantity"], "")
        self.assertEqual(rows[0]["description"], "")

    def test_fields_kept_verbatim(self) -> None:
        """Surrounding whitespace inside and outside quotes survives."""
        rows = decode_rows(_HEADER + '\n1,  A  ," A1 ","x\ny "\n')
        self.assertEqual(rows[0]["name"], "  A  ")
        self.assertEqual(rows[0]["sku"], " A1 ")
        self.assertEqual(rows[0]["category"], "x\ny ")

    def test_legacy_unescaped_quote_raises(self) -> None:
        """A bare quote inside a quoted field rejects the whole text."""
        text = _HEADER + '\n"1","Ok","O1"\n"2","Say "hi"","S1"\n'
        with self.assertRaises(CsvImportError):
            decode_rows(text)

    def test_crlf_line_endings(self) -> None:
        """Windows line endings parse the same as Unix ones."""
        rows = decode_rows(_HEADER + "\r\n1,A,A1\r\n2,B,B1\r\n")
        self.assertEqual(len(rows), 2)

    def test_malformed_quoting_raises(self) -> None:
        """Stray characters after a closing quote are rejected."""
        with self.assertRaises(CsvImportError):
            decode_rows(_HEADER + '\n"1","A"x,"A1"\n')

    def test_import_error_is_value_error(self) -> None:
        """CsvImportError can be caught as ValueError."""
        self.assertTrue(issubclass(CsvImportError, ValueError))


class TestExportFile(unittest.TestCase):
    """write_export and export_filename."""

    def test_filename_contains_date(self) -> None:
        """The export name embeds the ISO date."""
        self.assertEqual(
            export_filename(date(2026, 10, 18)),
            "inventory_2026-10-18.csv",
        )

    def test_write_export_creates_file(self) -> None:
        """The file is written with the encoded content."""
        with tempfile.TemporaryDirectory() as tmp:
            path = write_export(_sample_products(), Path(tmp) / "out")
            self.assertTrue(path.exists())
            self.assertTrue(path.name.startswith("inventory_"))
            self.assertTrue(path.name.endswith(".csv"))
            content = path.read_text(encoding="utf-8")
            self.assertEqual(content, encode_products(_sample_products()))

    def test_write_export_empty_writes_nothing(self) -> None:
        """An empty export raises before touching the disk."""
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "out"
            with self.assertRaises(EmptyInventoryError):
                write_export([], target)
            self.assertFalse(target.exists())


class TestReadImportFile(unittest.TestCase):
    """read_import_file behaviour."""

    def test_reads_full_text(self) -> None:
        """The whole file is returned."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "in.csv"
            path.write_text(_HEADER + "\n1,A,A1\n", encoding="utf-8")
            text = asyncio.run(read_import_file(path))
            self.assertEqual(text, _HEADER + "\n1,A,A1\n")

    def test_strips_byte_order_mark(self) -> None:
        """A UTF-8 BOM from spreadsheet exports is dropped."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "in.csv"
            path.write_bytes(b"\xef\xbb\xbf" + _HEADER.encode())
            text = asyncio.run(read_import_file(path))
            self.assertTrue(text.startswith("ID,"))

    def test_missing_file_raises_import_error(self) -> None:
        """A missing file is reported as an import error."""
        with self.assertRaises(CsvImportError):
            asyncio.run(read_import_file(Path("/nonexistent/in.csv")))

    def test_binary_file_raises_import_error(self) -> None:
        """Non-UTF-8 content is reported as an import error."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "in.csv"
            path.write_bytes(b"\xff\xfe\x00\x81")
            with self.assertRaises(CsvImportError):
                asyncio.run(read_import_file(path))


if __name__ == "__main__":
    unittest.main()
