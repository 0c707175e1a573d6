"""Read ledger journal files into transactions.

Journal text is cut into blocks, a block ends after two empty lines. Each
block is parsed line by line:

    2024-01-05 * (42) Groceries  ; comment
        Assets:Checking          -12.50 EUR
        Expenses:Food:Groceries

Only transactions are kept. Comments, comment blocks and directives
(`account`, `commodity`, `P`, periodic and automated transactions, ...)
are skipped together with their indented sub-lines.
"""

import datetime
import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable, Iterator

from .base import ParseError
from .entry import Absent, Posting, Present, Transaction

log = logging.getLogger(__name__)

re_transaction = re.compile(
    r"^(?P<date>\d{4}[-/.]\d{1,2}[-/.]\d{1,2})(?:=\S+)?"
    r"(?:\s+(?P<status>[*!]))?"
    r"(?:\s+\((?P<code>[^)]*)\))?"
    r"(?:\s+(?P<description>[^;]*?))?\s*(?:;(?P<comment>.*))?$"
)
re_posting = re.compile(
    r"^[ \t]+(?:[*!][ \t]+)?"
    r"(?P<account>[^ \t;](?:[^\t;]*?[^ \t;])??)"
    r"(?:(?:\t|  )[ \t]*(?P<amount>[^;=@]*?))?[ \t]*"
    r"(?:[@=][^;]*)?(?:;(?P<comment>.*))?$"
)
re_amount = re.compile(
    r"^(?P<sign>-)?\s*(?P<c1>\"[^\"]+\"|[^\d\s.,+-]+)?\s*"
    r"(?P<quantity>[-+]?\s?\d[\d.,]*)\s*"
    r"(?P<c2>\"[^\"]+\"|[^\d\s.,+-]\S*)?$"
)
re_indented_comment = re.compile(r"^[ \t]+[;#]")
re_commentline = re.compile(r"^[;#%|*]")
re_commentblock_begin = re.compile(r"^comment\s*$")
re_commentblock_end = re.compile(r"^end comment\s*$")
re_directive = re.compile(
    r"^(?:account|commodity|include|alias|apply|end|tag|payee|year|"
    r"P|D|Y|N|~|=)(?:\s|$)"
)
re_decimal_mark = re.compile(r"^decimal-mark\s+(\S+)\s*$")


@dataclass
class Block:
    """Non-empty journal lines with their line numbers."""

    numbered: list[tuple[int, str]] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(line for _, line in self.numbered)

    def __bool__(self) -> bool:
        return bool(self.numbered)


def split_blocks(lines: Iterable[str]) -> Iterator[Block]:
    """Yield blocks of lines, a block is closed by every second empty line."""
    block = Block()
    separator_count = 0
    for n, line in enumerate(lines, 1):
        line = line.rstrip("\r\n")
        if not line:
            separator_count += 1
            if separator_count == 2:
                if block:
                    yield block
                block = Block()
                separator_count = 0
        else:
            block.numbered.append((n, line))
    if block:
        yield block


def normalize_quantity(quantity: str, decimal_mark: str | None = None) -> str:
    """Drop thousands separators and make `.` the decimal mark.

    Without a declared *decimal_mark* the last of `,` and `.` is taken as
    the decimal mark when both appear, a lone `,` is a thousands separator.
    """
    quantity = quantity.replace(" ", "")
    if decimal_mark == ",":
        return quantity.replace(".", "").replace(",", ".")
    if decimal_mark == ".":
        return quantity.replace(",", "")
    cp, dp = quantity.rfind(","), quantity.rfind(".")
    if cp >= 0 and dp >= 0:
        if dp > cp:
            quantity = quantity.replace(",", "")
        else:
            quantity = quantity.replace(".", "").replace(",", ".")
    elif cp >= 0:
        quantity = quantity.replace(",", "")
    elif quantity.count(".") > 1:
        quantity = quantity.replace(".", "")
    return quantity


def parse_amount(text: str, decimal_mark: str | None = None) -> Present | Absent:
    """Parse amount like `-12.50 EUR`, `$1,000` or `-€5`. Commodity is dropped."""
    text = text.strip()
    if not text:
        return Absent()
    m = re_amount.match(text)
    if m is None:
        raise ValueError(f"Invalid amount: {text}")
    try:
        quantity = Decimal(normalize_quantity(m.group("quantity"), decimal_mark))
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {text}")
    if m.group("sign"):
        quantity = -quantity
    return Present(quantity)


def parse_date(text: str) -> datetime.date:
    year, month, day = re.split(r"[-/.]", text)
    return datetime.date(int(year), int(month), int(day))


def strip_virtual(account: str) -> str:
    if account[0] + account[-1] in ("()", "[]"):
        return account[1:-1]
    return account


@dataclass
class JournalParser:
    """Line parser for one journal, `decimal-mark` carries over between blocks."""

    source: str = "<string>"
    decimal_mark: str | None = None

    def parse(self, numbered: Iterable[tuple[int, str]]) -> list[Transaction]:
        transactions: list[Transaction] = []
        current: Transaction | None = None
        within_commentblock = False
        skipping = False
        for n, line in numbered:
            if within_commentblock:
                if re_commentblock_end.match(line):
                    within_commentblock = False
                continue
            if re_commentblock_begin.match(line):
                within_commentblock = True
                continue
            if not line.strip() or re_indented_comment.match(line):
                continue
            if line[0] in " \t":
                if skipping:
                    continue
                m = re_posting.match(line)
                if m is None:
                    raise ParseError(f"Invalid posting: {line.strip()}", self.source, n)
                if current is None:
                    raise ParseError("Posting outside of transaction", self.source, n)
                try:
                    amount = parse_amount(m.group("amount") or "", self.decimal_mark)
                except ValueError as e:
                    raise ParseError(str(e), self.source, n) from e
                current.postings.append(Posting(strip_virtual(m.group("account")), amount))
                continue
            # unindented line ends the current transaction or directive
            current = None
            skipping = False
            if re_commentline.match(line):
                continue
            m = re_decimal_mark.match(line)
            if m is not None:
                if m.group(1) not in (".", ","):
                    raise ParseError(f"Invalid decimal mark: {m.group(1)}", self.source, n)
                self.decimal_mark = m.group(1)
                continue
            if re_directive.match(line):
                skipping = True
                continue
            m = re_transaction.match(line)
            if m is None:
                raise ParseError(f"Unrecognized line: {line}", self.source, n)
            try:
                date = parse_date(m.group("date"))
            except ValueError as e:
                raise ParseError(f"Invalid date: {m.group('date')}", self.source, n) from e
            current = Transaction(description=m.group("description") or "", date=date)
            transactions.append(current)
        return transactions


def parse_block(text: str, source: str = "<string>", first_line: int = 1) -> list[Transaction]:
    """Parse transactions from a piece of journal text."""
    return JournalParser(source).parse(enumerate(text.splitlines(), first_line))


def read_journal(path: str | Path) -> list[Transaction]:
    """Read all transactions of a journal file in file order."""
    transactions: list[Transaction] = []
    parser = JournalParser(str(path))
    with open(path, encoding="utf-8") as f:
        for block in split_blocks(f):
            transactions.extend(parser.parse(block.numbered))
    log.info("Read %d transactions from %s", len(transactions), path)
    return transactions


def read_journals(paths: Iterable[str | Path]) -> list[Transaction]:
    """Read journal files one after another in the given order."""
    transactions: list[Transaction] = []
    for path in paths:
        transactions.extend(read_journal(path))
    return transactions
