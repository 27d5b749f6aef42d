from .base_model import Base
from .student_model import Student, StudentStatus
from .course_model import Course, BillingPeriod
from .enrollment_model import Enrollment
from .payment_model import Payment, PaymentStatus
