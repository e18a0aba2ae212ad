# API Route Constants

# Base API
API_BASE = '/api'

# User routes
USER_BASE = f'{API_BASE}/user'
USER_CREATE = USER_BASE
USER_LOGIN = f'{USER_BASE}/login'
USER_ME = USER_BASE

# Movie routes
MOVIE_BASE = f'{API_BASE}/movie'
MOVIE_CREATE = MOVIE_BASE
MOVIE_LIST = MOVIE_BASE
MOVIE_GET = f'{MOVIE_BASE}/{{movie_id}}'

# Showtime routes
SHOWTIME_BASE = f'{API_BASE}/showtime'
SHOWTIME_CREATE = SHOWTIME_BASE
SHOWTIME_LIST = SHOWTIME_BASE
SHOWTIME_GET = f'{SHOWTIME_BASE}/{{showtime_id}}'
SHOWTIME_SEATS = f'{SHOWTIME_BASE}/{{showtime_id}}/seats'
SHOWTIME_SEATS_AUDIT = f'{SHOWTIME_BASE}/{{showtime_id}}/seats/audit'
SHOWTIME_RESERVATIONS = f'{SHOWTIME_BASE}/{{showtime_id}}/reservations'

# Reservation routes
RESERVATION_BASE = f'{API_BASE}/reservation'
RESERVATION_CREATE = RESERVATION_BASE
RESERVATION_MY = f'{RESERVATION_BASE}/my'
RESERVATION_GET = f'{RESERVATION_BASE}/{{reservation_id}}'
RESERVATION_CANCEL = f'{RESERVATION_BASE}/{{reservation_id}}/cancel'
