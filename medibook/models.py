"""Pydantic models for the booking API's JSON envelopes."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WireModel(BaseModel):
    """Base for backend payloads: camelCase aliases, unknown keys ignored."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Address(WireModel):
    """Postal address lines shown on doctor cards."""
    line1: Optional[str] = None
    line2: Optional[str] = None


class Doctor(WireModel):
    """Doctor as cached from the directory endpoint."""
    id: str = Field(..., alias="_id", description="Backend doctor id")
    name: str = Field(..., description="Display name")
    image: str = ""
    degree: str = ""
    speciality: str = ""
    experience: str = ""
    about: str = ""
    fees: float = Field(0, ge=0, description="Appointment fee (currency-agnostic)")
    available: bool = True
    address: Address = Field(default_factory=Address)
    slots_booked: Dict[str, Any] = Field(
        default_factory=dict,
        description="date_key -> booked time labels"
    )

    @field_validator("slots_booked", mode="before")
    @classmethod
    def coerce_slots_booked(cls, value):
        """Treat a missing or non-mapping booking map as no bookings."""
        return value if isinstance(value, dict) else {}

    @field_validator("address", mode="before")
    @classmethod
    def coerce_address(cls, value):
        return value if isinstance(value, dict) else {}


class DoctorSnapshot(WireModel):
    """Doctor data embedded in an appointment; every field may be missing."""
    name: Optional[str] = None
    image: Optional[str] = None
    speciality: Optional[str] = None
    address: Address = Field(default_factory=Address)

    @field_validator("address", mode="before")
    @classmethod
    def coerce_address(cls, value):
        return value if isinstance(value, dict) else {}


class Appointment(WireModel):
    """A user's appointment as returned by my-appointments."""
    id: str = Field(..., alias="_id")
    user_id: Optional[str] = Field(None, alias="userId")
    doc_id: Optional[str] = Field(None, alias="docId")
    slot_date: Optional[str] = Field(None, alias="slotDate")
    slot_time: Optional[str] = Field(None, alias="slotTime")
    doc_data: DoctorSnapshot = Field(default_factory=DoctorSnapshot, alias="docData")
    amount: Optional[float] = None
    date: Optional[int] = Field(None, description="Creation timestamp (ms)")
    cancelled: bool = False
    payment: bool = False
    is_completed: bool = Field(False, alias="isCompleted")

    @field_validator("doc_data", mode="before")
    @classmethod
    def coerce_doc_data(cls, value):
        return value if isinstance(value, dict) else {}


class PaymentOrder(WireModel):
    """Payment order created by the backend for an appointment."""
    id: str
    amount: int = Field(..., description="Amount in minor currency units")
    currency: str
    receipt: Optional[str] = None


class ApiEnvelope(WireModel):
    """Common ``{success, message}`` response envelope."""
    success: bool
    message: Optional[str] = None


class DoctorListResponse(ApiEnvelope):
    doctors: List[Doctor] = Field(default_factory=list)


class AppointmentListResponse(ApiEnvelope):
    appointments: List[Appointment] = Field(default_factory=list)


class PaymentOrderResponse(ApiEnvelope):
    order: Optional[PaymentOrder] = None
