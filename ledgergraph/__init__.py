from .base import (
    AccountNotFound,
    ArithmeticOverflow,
    LedgerGraphError,
    MalformedTransaction,
    ParseError,
)
from .entry import Absent, Posting, Present, ResolvedPosting, Transaction, resolve
from .journal import read_journal, read_journals, split_blocks, parse_block
from .ledger import Ledger, ReportDict
from .series import BalanceSeries, series_for
