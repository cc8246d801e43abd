"""
Patient Pydantic schemas for request/response validation
"""

from pydantic import Field
from typing import Optional, List, Union
from datetime import date
from enum import Enum

from schemas.common import CamelModel, Timestamp


class MaritalStatus(str, Enum):
    SINGLE = "SINGLE"
    MARRIED = "MARRIED"
    DIVORCED = "DIVORCED"
    WIDOWED = "WIDOWED"
    SEPARATED = "SEPARATED"


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class EmploymentStatus(str, Enum):
    EMPLOYED = "EMPLOYED"
    UNEMPLOYED = "UNEMPLOYED"
    SELF_EMPLOYED = "SELF_EMPLOYED"
    RETIRED = "RETIRED"
    STUDENT = "STUDENT"


class PatientStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class MeasurementType(str, Enum):
    WEIGHT = "WEIGHT"
    HEIGHT = "HEIGHT"
    BLOOD_PRESSURE = "BLOOD_PRESSURE"
    HEART_RATE = "HEART_RATE"
    TEMPERATURE = "TEMPERATURE"


class Measurement(CamelModel):
    id: str
    patient_id: str
    type: MeasurementType
    value: Union[float, str]  # e.g. 72.5 or "120/80"
    unit: str = ""
    date: Timestamp


class Medication(CamelModel):
    id: str
    patient_id: str
    name: str
    dosage: str = ""
    frequency: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    active: bool = True


class Patient(CamelModel):
    id: str
    first_name: str
    last_name: str
    phone_number: str = ""
    email: str = ""
    address: str = ""
    address_line_two: Optional[str] = None
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = ""
    address_valid: bool = False
    guardian_name: Optional[str] = None
    guardian_phone_number: Optional[str] = None
    marital_status: Optional[MaritalStatus] = None
    gender: Optional[Gender] = None
    employment_status: Optional[EmploymentStatus] = None
    status: PatientStatus = PatientStatus.ACTIVE
    date_of_birth: Optional[date] = None
    allergies: List[str] = []
    family_history: List[str] = []
    medical_history: List[str] = []
    prescriptions: List[str] = []
    goal_weight: Optional[float] = Field(None, ge=0)
    is_onboarding_complete: bool = False
    created_date: Optional[Timestamp] = None
    firebase_uid: Optional[str] = None
    measurements: List[Measurement] = []
    medications: List[Medication] = []


class PatientUpdate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    address_line_two: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    address_valid: Optional[bool] = None
    guardian_name: Optional[str] = None
    guardian_phone_number: Optional[str] = None
    marital_status: Optional[MaritalStatus] = None
    gender: Optional[Gender] = None
    employment_status: Optional[EmploymentStatus] = None
    status: Optional[PatientStatus] = None
    date_of_birth: Optional[date] = None
    allergies: Optional[List[str]] = None
    family_history: Optional[List[str]] = None
    medical_history: Optional[List[str]] = None
    prescriptions: Optional[List[str]] = None
    goal_weight: Optional[float] = Field(None, ge=0)
    is_onboarding_complete: Optional[bool] = None
    measurements: Optional[List[Measurement]] = None
    medications: Optional[List[Medication]] = None
