from enum import Enum


class UserRole(str, Enum):
    student = "student"
    admin = "admin"


class Branch(str, Enum):
    computer_science = "Computer Science"
    electrical = "Electrical Engineering"
    mechanical = "Mechanical Engineering"
    civil = "Civil Engineering"
    chemical = "Chemical Engineering"
    electronics = "Electronics & Communication"
    information_technology = "Information Technology"
    biotechnology = "Biotechnology"
    aerospace = "Aerospace Engineering"


class Minor(str, Enum):
    data_science = "Data Science"
    artificial_intelligence = "Artificial Intelligence"
    finance = "Finance"
    entrepreneurship = "Entrepreneurship"
    design = "Design"
    management = "Management"


class JobType(str, Enum):
    full_time = "full-time"
    internship = "internship"
    part_time = "part-time"
    contract = "contract"


class ApplicationStatus(str, Enum):
    """Closed set; adding a value needs a schema change."""
    applied = "applied"
    shortlisted = "shortlisted"
    rejected = "rejected"
    selected = "selected"
