# API Route Constants

# Base API
API_BASE = '/api'

# User routes
USER_BASE = f'{API_BASE}/users'
USER_CREATE = USER_BASE
USER_LOGIN = f'{USER_BASE}/login'
USER_ME = f'{USER_BASE}/me'
USER_CHANGE_PASSWORD = f'{USER_BASE}/password'
USER_FORGOT_PASSWORD = f'{USER_BASE}/forgotpassword'
USER_RESET_PASSWORD = f'{USER_BASE}/forgotpassword/{{token}}'

# Tour routes
TOUR_BASE = f'{API_BASE}/tours'
TOUR_CREATE = TOUR_BASE
TOUR_LIST = TOUR_BASE
TOUR_GET = f'{TOUR_BASE}/{{tour_id}}'
TOUR_REPLACE = f'{TOUR_BASE}/{{tour_id}}'
TOUR_PATCH = f'{TOUR_BASE}/{{tour_id}}'
TOUR_DELETE = f'{TOUR_BASE}/{{tour_id}}'

# Booking routes
BOOKING_BASE = f'{API_BASE}/bookings'
BOOKING_CREATE = BOOKING_BASE
BOOKING_LIST = BOOKING_BASE
BOOKING_GET = f'{BOOKING_BASE}/{{booking_id}}'
BOOKING_REPLACE = f'{BOOKING_BASE}/{{booking_id}}'
BOOKING_PATCH = f'{BOOKING_BASE}/{{booking_id}}'
BOOKING_DELETE = f'{BOOKING_BASE}/{{booking_id}}'
BOOKING_CHECKOUT = f'{BOOKING_BASE}/{{booking_id}}/checkout'
