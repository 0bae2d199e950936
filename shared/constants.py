"""Roles, status values and upload limits."""

# User roles (profiles.role)
ROLE_ADMIN = "ADMIN"
ROLE_STAFF = "STAFF"
ROLE_USER = "USER"

STAFF_ROLES = (ROLE_ADMIN, ROLE_STAFF)
ADMIN_ONLY = (ROLE_ADMIN,)

CONSULTATION_STATUSES = ("NEW", "CONTACTED", "IN_PROGRESS", "COMPLETED", "CANCELLED")

APPOINTMENT_STATUSES = ("PENDING", "CONFIRMED", "COMPLETED", "CANCELLED")

# Image uploads
MAX_IMAGE_BYTES = 5 * 1024 * 1024
MAX_IMAGES_PER_REQUEST = 10
IMAGE_FOLDER = "construction-projects"
