"""
Green Loan Scoring API - Vercel Serverless Function
TerraLend - Green Lending

Serves the same FastAPI app as the local webapp behind a Mangum adapter.
"""

import os
import sys

from mangum import Mangum

# Vercel puts files in /var/task
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if BASE_DIR not in sys.path:
    sys.path.insert(0, BASE_DIR)

from greenscore.logging_config import configure_logging  # noqa: E402
from webapp.api import app  # noqa: E402

configure_logging()

# Handler for Vercel
handler = Mangum(app)
