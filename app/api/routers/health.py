from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api import deps
from app.services.health import HealthReporter

router = APIRouter()


@router.get("")
async def health(reporter: HealthReporter = Depends(deps.get_reporter)):
    report = await reporter.compute_report()
    status_code = 503 if report.is_starting() else 200
    return JSONResponse(status_code=status_code, content=report.to_payload())


@router.get("/live")
async def live():
    return {"status": "ok"}
