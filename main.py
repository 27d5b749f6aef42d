# main.py
from fastapi import FastAPI
from contextlib import asynccontextmanager
from apscheduler.schedulers.asyncio import AsyncIOScheduler # type: ignore
from apscheduler.triggers.cron import CronTrigger # type: ignore
from fastapi.middleware.cors import CORSMiddleware
from app.api.v1.api import api_router
from app.config import CORS_ORIGINS, OVERDUE_SWEEP_HOUR, OVERDUE_SWEEP_MINUTE
from app.database import Base, engine, SessionLocal
from app.models import *
from app.services import payment_service
import logging

# Cấu hình logging cho ứng dụng và APScheduler
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logging.getLogger('apscheduler').setLevel(logging.INFO)
logger = logging.getLogger(__name__)

# Tạo scheduler
scheduler = AsyncIOScheduler()

# Hàm tác vụ sẽ được lập lịch
async def run_overdue_payments_task():
    """Tác vụ cập nhật học phí quá hạn, chạy định kỳ."""
    db = SessionLocal()
    try:
        updated = payment_service.update_overdue_payments(db)
        logger.info(f"Overdue sweep finished, {updated} payment(s) updated.")
    except Exception:
        logger.exception("Overdue sweep failed")
    finally:
        db.close()

# Hàm lifespan event handler
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Tạo tất cả các bảng trong cơ sở dữ liệu
    Base.metadata.create_all(bind=engine)

    scheduler.add_job(
        run_overdue_payments_task,
        trigger=CronTrigger(hour=OVERDUE_SWEEP_HOUR, minute=OVERDUE_SWEEP_MINUTE),
        id="overdue_payment_job",
        name="Update Overdue Payments",
        replace_existing=True,
    )
    scheduler.start()
    logger.info("Scheduler started.")

    yield # Điểm này ứng dụng sẽ chạy

    scheduler.shutdown()
    logger.info("Scheduler stopped.")

# Khởi tạo ứng dụng FastAPI với lifespan handler
app = FastAPI(
    title="Course Tuition API",
    description="API quản lý học sinh, khóa học, ghi danh và học phí định kỳ.",
    version="1.0.0",
    lifespan=lifespan
)

# Cấu hình CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Bao gồm router chính của API v1
app.include_router(api_router, prefix="/api/v1")

@app.get("/")
def read_root():
    return {"message": "Welcome to the Course Tuition API! Visit /docs for API documentation."}
