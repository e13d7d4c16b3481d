"""
Upload routes — load a spending table from an upload or the bundled sample.
"""

import json
import logging
import tempfile
from pathlib import Path

from fastapi import APIRouter, File, HTTPException, UploadFile

from core.cleaner import clean_records
from core.parser import (
    SAMPLE_DATASET,
    SUPPORTED_EXTENSIONS,
    parse_upload,
    suggest_column_mapping,
    validate_data,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _df_records(df):
    """
    Convert DataFrame rows to JSON-safe records.
    Ensures NaN becomes null so FastAPI serialization won't raise 500.
    """
    return json.loads(df.to_json(orient="records"))


def _load(file_path: str, display_name: str) -> dict:
    """Parse, validate and clean one file into the response body."""
    try:
        raw_df = parse_upload(file_path)
    except Exception as e:
        logger.exception("Failed to parse %s", display_name)
        raise HTTPException(400, f"Failed to process upload '{display_name}': {str(e)}")

    issues = validate_data(raw_df)
    if any(i["severity"] == "critical" for i in issues):
        raise HTTPException(400, {"message": "Upload rejected.", "issues": issues})

    records, report = clean_records(raw_df)
    return {
        "filename": display_name,
        "column_mapping": suggest_column_mapping(raw_df),
        "issues": issues,
        "cleaning_report": report,
        "record_count": len(records),
        "data": _df_records(records),
    }


@router.post("/file")
async def upload_file(file: UploadFile = File(...)):
    """
    Upload a CSV or Excel file.
    Returns the cleaned records and the cleaning report. Nothing is kept on
    disk once the response is built.
    """
    ext = Path(file.filename or "").suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise HTTPException(400, f"Unsupported file type: {ext}. Use CSV or Excel.")

    with tempfile.TemporaryDirectory() as tmpdir:
        save_path = Path(tmpdir) / f"upload{ext}"
        with open(save_path, "wb") as f:
            while True:
                chunk = await file.read(1024 * 1024)
                if not chunk:
                    break
                f.write(chunk)
        return _load(str(save_path), file.filename)


@router.get("/sample")
async def load_sample_data():
    """Load the bundled student spending dataset."""
    if not SAMPLE_DATASET.exists():
        raise HTTPException(404, f"Sample file not found on disk: {SAMPLE_DATASET.name}")
    return _load(str(SAMPLE_DATASET), SAMPLE_DATASET.name)
