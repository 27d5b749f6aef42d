from app.database import Base, engine
from app.models import Student, Course, Enrollment, Payment  # noqa: F401  đăng ký các bảng với Base.metadata
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def recreate_database():
    logger.info("Đang xóa tất cả các bảng cơ sở dữ liệu...")
    # drop_all xóa theo thứ tự phụ thuộc ngược (payments, enrollments trước)
    Base.metadata.drop_all(bind=engine)

    logger.info("Đang tạo lại tất cả các bảng cơ sở dữ liệu...")
    Base.metadata.create_all(bind=engine)
    logger.info("Cơ sở dữ liệu đã được tạo lại thành công!")

if __name__ == "__main__":
    recreate_database()
