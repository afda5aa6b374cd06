from fastapi import APIRouter
from movie_revenue_analytics.controllers.seed_controller import SeedController

router = APIRouter(prefix="/seed", tags=["seed"])
seed_controller = SeedController()
router.include_router(seed_controller.router)
