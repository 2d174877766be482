from ledger.utils.mail import send_email
from ledger.utils.spreadsheet import XLSX_CONTENT_TYPE, render_ledger_as_spreadsheet

__all__ = ["send_email", "render_ledger_as_spreadsheet", "XLSX_CONTENT_TYPE"]
