"""Store table and column names (schema-in-code).

The schema lives in the hosted backend; use these constants so table
names stay consistent across repositories.
"""

TABLE_PROFILES = "profiles"
TABLE_HOTELS = "hotels"
TABLE_AREAS = "areas"
TABLE_USER_AREA_ACCESS = "user_area_access"
TABLE_AUDIT_SECTIONS = "audit_sections"
TABLE_AUDIT_QUESTIONS = "audit_questions"

PROFILE_COLUMNS = "id, hotel_id, role, active, full_name"
QUESTION_ORDER_COLUMNS = "id, audit_section_id, order, created_at"
