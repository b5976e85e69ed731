from .projection import project, project_booking, short_id, date_only
from .codec import encode, decode
from .links import build_share_url, build_share_message, build_booking_url
from .line_items import expand_line_items, round_cents
