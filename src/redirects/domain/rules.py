from src.redirects.domain.models import RedirectRule

# Declaration order is match order; keep specific paths ahead of patterns.
DEFAULT_REDIRECT_RULES: tuple[RedirectRule, ...] = (
    # Retired articles reported by the crawler audit
    RedirectRule("/bahubali-hills-udaipur-where-nature-and-history-converge", "/latest"),
    RedirectRule("/ranchi-waterpark-discovering-the-aquatic-wonderland", "/hindi"),
    RedirectRule("/how-to-link-pan-card-with-aadhar-card-link-pan-card-with-aadhar-card", "/hindi"),
    RedirectRule("/link-pan-card-with-aadhar-card", "/hindi"),
    RedirectRule("/diwali2020", "/latest"),
    RedirectRule("/custom-rom", "/latest"),
    RedirectRule("/opt-out-of-subsidy-solutions-in-hindi", "/hindi"),
    RedirectRule("/tribal-culture-in-india", "/latest"),
    RedirectRule("/rajasthani-culture", "/latest"),
    RedirectRule("/discover-akshardham-serene-boat-ride-in-delhi", "/latest"),
    RedirectRule("/mi-cloud", "/latest"),
    RedirectRule("/lugu-pahar-jharkhand", "/hindi"),
    RedirectRule("/bhadrakali_mandir_itkhori", "/hindi"),
    RedirectRule("/bhadrakali-mandir-itkhori", "/hindi"),
    RedirectRule("/best-laptop-under-50000", "/latest"),
    RedirectRule("/telibagh-lucknow-uttar-pradesh", "/latest"),
    RedirectRule("/web-series-on-netflix", "/latest"),
    RedirectRule("/hot-webseries", "/latest"),
    RedirectRule("/banaso-mandir", "/hindi"),
    RedirectRule("/sandhya-veer-ranchi-a-beacon-of-progress-and-culture", "/hindi"),
    # Old /blog prefix
    RedirectRule("/blog/:slug*", "/:slug*"),
    # Topic families
    RedirectRule("/microsoft*", "/latest"),
    RedirectRule("/webseries*", "/latest"),
    RedirectRule("/web-series*", "/latest"),
    RedirectRule("/laptop*", "/latest"),
    RedirectRule("/mobile*", "/latest"),
    RedirectRule("/temple*", "/hindi"),
    RedirectRule("/mandir*", "/hindi"),
    RedirectRule("/culture*", "/latest"),
    RedirectRule("/travel*", "/latest"),
    # Legacy blogging platform paths
    RedirectRule("/p/:path*", "/latest"),
    RedirectRule("/post/:path*", "/latest"),
    RedirectRule("/articles/:path*", "/latest"),
    RedirectRule("/2020/:path*", "/latest"),
    RedirectRule("/2021/:path*", "/latest"),
    RedirectRule("/2022/:path*", "/latest"),
    RedirectRule("/2023/:path*", "/latest"),
    RedirectRule("/2024/:path*", "/latest"),
    RedirectRule("/:path*.php", "/latest"),
    RedirectRule("/:path*.asp", "/latest"),
    RedirectRule("/:path*.jsp", "/latest"),
    RedirectRule("/wp-admin/:path*", "/"),
    RedirectRule("/wp-content/:path*", "/"),
    RedirectRule("/pages/:path*", "/:path*"),
)
