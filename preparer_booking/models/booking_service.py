from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class BookingService(SQLModel, table=True):
    __tablename__ = "booking_services"
    id: int | None = Field(default=None, primary_key=True)
    name: str
    duration_minutes: int = 60
    buffer_after_minutes: int = 15
    # Availability rules this service may be booked against; empty means any rule
    availability_rule_ids: list[int] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    is_active: bool = True
