from fastapi import FastAPI

from weekplanner.config import configure_logging
from weekplanner.routes import schedule
from weekplanner.schemas import HealthResponse

configure_logging()

# Create FastAPI app
app = FastAPI(
    title="Weekplanner API",
    description="Deterministic weekly planning and conflict resolution for classes, deadlines and study time",
    version="1.0.0"
)

# Include routers
app.include_router(schedule.router, prefix="/schedule", tags=["schedule"])

@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": "Welcome to Weekplanner API",
        "version": "1.0.0",
        "endpoints": {
            "plan": "POST /schedule/plan - Plan a week from routines, deadlines and a study plan",
            "generate": "POST /schedule/generate - Urgency-ranked study plan from course metadata",
            "resolve": "POST /schedule/resolve - Resolve overlaps in an existing calendar",
            "actions": "POST /schedule/actions - Apply add/modify/delete actions and resolve"
        },
        "swagger_ui": "/docs - Interactive API documentation",
        "redoc": "/redoc - Alternative API documentation"
    }

@app.get("/health", response_model=HealthResponse)
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "API is running"}

# This allows running the app directly with: python -m weekplanner.main
if __name__ == "__main__":
    import uvicorn
    from weekplanner.config import API_HOST, API_PORT
    uvicorn.run("weekplanner.main:app", host=API_HOST, port=API_PORT, reload=True)
