from sqlmodel import Field, SQLModel


class PreparerBase(SQLModel):
    first_name: str
    last_name: str
    booking_enabled: bool = True
    allow_phone_bookings: bool = True
    allow_video_bookings: bool = True
    allow_in_person_bookings: bool = False
    require_approval_for_bookings: bool = False


class Preparer(PreparerBase, table=True):
    __tablename__ = "preparers"
    id: int | None = Field(default=None, primary_key=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
