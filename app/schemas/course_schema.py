from pydantic import BaseModel, Field, field_serializer
from typing import List, Optional
from datetime import date
from decimal import Decimal
from app.models.course_model import BillingPeriod

class CourseBase(BaseModel):
    name: str = Field(..., example="Piano A1")
    start_date: date = Field(..., example="2024-01-01")
    fee: Decimal = Field(..., gt=0, example=1000)
    period: BillingPeriod = Field(BillingPeriod.monthly, description="weekly, monthly, yearly")
    schedule_days: List[str] = Field(default_factory=list, example=["Monday", "Wednesday"])
    schedule_time: Optional[str] = Field(None, example="14:00")
    notes: Optional[str] = None

class CourseCreate(CourseBase):
    pass

class CourseUpdate(BaseModel):
    name: Optional[str] = None
    start_date: Optional[date] = None
    fee: Optional[Decimal] = Field(None, gt=0)
    period: Optional[BillingPeriod] = None
    schedule_days: Optional[List[str]] = None
    schedule_time: Optional[str] = None
    notes: Optional[str] = None

class CourseRead(CourseBase):
    course_id: str

    class Config:
        from_attributes = True

    @field_serializer("fee")
    def serialize_fee(self, fee: Decimal, _info):
        return float(fee)
