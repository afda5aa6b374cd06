from fastapi import APIRouter
from movie_revenue_analytics.controllers.analytics_controller import AnalyticsController

router = APIRouter(prefix="/analytics", tags=["analytics"])
analytics_controller = AnalyticsController()
router.include_router(analytics_controller.router)
