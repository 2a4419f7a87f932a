from .logging_handler import GoogleAnalyticsHandler, add_google_analytics_handler

__all__ = ["GoogleAnalyticsHandler", "add_google_analytics_handler"]
