"""Hand-written site description used when scraping yields too little text."""

from __future__ import annotations

FALLBACK_TEXT = """\
=== YAP CAPITALIST INFORMATION ===

Yap Capitalist is a platform focused on helping entrepreneurs and business owners.

Key Services:
- Business consulting and advisory services
- Investment opportunities and guidance
- Educational webinars and training programs
- Application process for business opportunities

Contact and Applications:
- Main website: https://www.yapcapitalist.com/
- Apply for services: https://www.yapcapitalist.com/apply
- Join webinars: https://www.yapcapitalist.com/webinar
- Application form: https://www.yapcapitalist.com/application-form

This platform appears to focus on business growth, investment strategies, and entrepreneurial development."""

# Written when startup initialisation itself fails.
LAST_RESORT_TEXT = """\
=== YAP CAPITALIST - FALLBACK DATA ===
Yap Capitalist - Business consulting and investment platform.
Visit https://www.yapcapitalist.com/ for more information."""
