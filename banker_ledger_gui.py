"""
BankerLedger GUI
- Record each round's results against the banker, per player.
- See running totals, who pays whom, and export an Excel report.

Run:
  python banker_ledger_gui.py [session.json]

Dependencies:
  pip install openpyxl
(Tkinter ships with most Python distributions; on some Linux you may need: sudo apt-get install python3-tk)
"""
from __future__ import annotations
import logging
import os
import sys

try:
    import tkinter as tk
except ModuleNotFoundError:
    tk = None

from config import default_session_path


def setup_logging():
    """Configure root logger; level from BANKER_LEDGER_LOG_LEVEL"""
    level = os.environ.get("BANKER_LEDGER_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )


def main():
    """Main entry point for the application"""
    setup_logging()
    if tk is None:
        raise RuntimeError(
            'tkinter is not available. Install it (e.g., on Ubuntu: sudo apt-get install python3-tk) '
            'and re-run to use the GUI.'
        )

    from main_app import BankerLedgerApp

    path = sys.argv[1] if len(sys.argv) > 1 else default_session_path()
    root = tk.Tk()
    app = BankerLedgerApp(root, session_path=path)
    root.protocol("WM_DELETE_WINDOW", app.close)
    root.mainloop()


if __name__ == "__main__":
    main()
