"""SEO rules applied to every crawled page."""
from seo_scout.seo.validator import validate_seo_tags

__all__ = ["validate_seo_tags"]
