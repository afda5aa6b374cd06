from fastapi import APIRouter, Depends, UploadFile, File, HTTPException
from pathlib import Path
from sqlalchemy.engine import Engine
import shutil
import tempfile
import logging

from movie_revenue_analytics.data_access.database import get_db_engine
from movie_revenue_analytics.domain.models.revenue import SeedResult
from movie_revenue_analytics.services.seed_service import SeedService

logger = logging.getLogger(__name__)

class SeedController:
    def __init__(self):
        """Initialize the SeedController with a router."""
        self.router = APIRouter()
        self._register_routes()

    def _register_routes(self):
        @self.router.post("/", response_model=SeedResult)
        def seed_data(file: UploadFile = File(...), db_engine: Engine = Depends(get_db_engine)) -> SeedResult:
            """Load an uploaded CSV or JSON movie file into the catalog."""
            # Validate file type
            if not file.filename:
                raise HTTPException(status_code=400, detail="Uploaded file has no filename")
            file_type = file.filename.split(".")[-1].lower()
            if file_type not in ["csv", "json"]:
                raise HTTPException(status_code=400, detail="Unsupported file type. Use 'csv' or 'json'")

            try:
                with tempfile.TemporaryDirectory() as tmp_dir:
                    raw_file_path = Path(tmp_dir) / Path(file.filename).name
                    with raw_file_path.open("wb") as buffer:
                        shutil.copyfileobj(file.file, buffer)
                    logger.info(f"Saved upload {file.filename} to {raw_file_path}")
                    return SeedService(db_engine).load_file(str(raw_file_path))
            except (KeyError, ValueError) as e:
                raise HTTPException(status_code=400, detail=str(e))
            except Exception as e:
                logger.error(f"Failed to seed data from {file.filename}: {str(e)}")
                raise HTTPException(status_code=500, detail=f"Failed to seed data: {str(e)}")
