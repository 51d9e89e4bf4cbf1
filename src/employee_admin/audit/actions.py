"""Action tags written to activity_logs.action."""

LOGIN = "LOGIN"
LOGIN_FAILED = "LOGIN_FAILED"
LOGOUT = "LOGOUT"
SIGNUP = "SIGNUP"
EMAIL_VERIFIED = "EMAIL_VERIFIED"

EMPLOYEE_CREATED = "EMPLOYEE_CREATED"
EMPLOYEE_UPDATED = "EMPLOYEE_UPDATED"
EMPLOYEE_DELETED = "EMPLOYEE_DELETED"

ROLE_CREATED = "ROLE_CREATED"
ROLE_UPDATED = "ROLE_UPDATED"
ROLE_DELETED = "ROLE_DELETED"
ROLE_ASSIGNED = "ROLE_ASSIGNED"
ROLE_REMOVED = "ROLE_REMOVED"

LEAVE_CREATED = "LEAVE_CREATED"
LEAVE_UPDATED = "LEAVE_UPDATED"
LEAVE_DELETED = "LEAVE_DELETED"
LEAVE_APPROVED = "LEAVE_APPROVED"
LEAVE_REJECTED = "LEAVE_REJECTED"
LEAVE_STATUS_UPDATED = "LEAVE_STATUS_UPDATED"

BIODATA_CREATED = "BIODATA_CREATED"
BIODATA_UPDATED = "BIODATA_UPDATED"
BIODATA_DELETED = "BIODATA_DELETED"

SALARY_CREATED = "SALARY_CREATED"
SALARY_UPDATED = "SALARY_UPDATED"
SALARY_DELETED = "SALARY_DELETED"

HOLIDAY_CREATED = "HOLIDAY_CREATED"
HOLIDAY_UPDATED = "HOLIDAY_UPDATED"
HOLIDAY_DELETED = "HOLIDAY_DELETED"

GRIEVANCE_CREATED = "GRIEVANCE_CREATED"
GRIEVANCE_UPDATED = "GRIEVANCE_UPDATED"
GRIEVANCE_DELETED = "GRIEVANCE_DELETED"

RESIGNATION_CREATED = "RESIGNATION_CREATED"
RESIGNATION_UPDATED = "RESIGNATION_UPDATED"
RESIGNATION_DELETED = "RESIGNATION_DELETED"

ACTIVITY_LOGS_VIEWED = "ACTIVITY_LOGS_VIEWED"
