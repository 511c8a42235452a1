# Internal links known to hit a removed page or a redirect, mapped to where
# they should point instead.
BROKEN_LINK_FIXES: dict[str, str] = {
    # Pages that no longer exist
    "/tribal-culture-in-india": "/latest",
    "/rajasthani-culture": "/latest",
    "/discover-akshardham-serene-boat-ride-in-delhi": "/latest",
    "/bahubali-hills-udaipur-where-nature-and-history-converge": "/latest",
    # Redirected pages, pointed at their final destination
    "/mi-cloud": "/latest",
    "/lugu-pahar-jharkhand": "/hindi",
    "/bhadrakali_mandir_itkhori": "/hindi",
    "/bhadrakali-mandir-itkhori": "/hindi",
    "/best-laptop-under-50000": "/latest",
    "/telibagh-lucknow-uttar-pradesh": "/latest",
    "/web-series-on-netflix": "/latest",
    "/hot-webseries": "/latest",
    "/banaso-mandir": "/hindi",
    "/ranchi-waterpark-discovering-the-aquatic-wonderland": "/hindi",
    "/sandhya-veer-ranchi-a-beacon-of-progress-and-culture": "/hindi",
    "/how-to-link-pan-card-with-aadhar-card-link-pan-card-with-aadhar-card": "/hindi",
    # Common guesses by authors
    "/best-web-series": "/latest",
    "/netflix-series": "/latest",
    "/webseries": "/latest",
    "/laptop-review": "/latest",
    "/mobile-review": "/latest",
    "/travel-guide": "/latest",
    "/temple-guide": "/hindi",
    "/tech-news": "/latest",
}

# Substrings that mark a link as probably dead when no concrete fix is known.
BROKEN_LINK_KEYWORDS: tuple[str, ...] = ("webseries", "laptop", "mobile", "temple", "travel", "culture")

RECOMMENDATIONS: tuple[str, ...] = (
    "Run POST /api/link-health with action=fix to automatically fix known broken links",
    "Review and create missing pages for important 404 links",
    "Update content to use correct URLs",
)
