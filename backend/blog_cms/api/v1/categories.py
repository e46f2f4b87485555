# blog_cms/api/v1/categories.py
from blog_cms.application.taxonomy.kinds import CATEGORY
from ._taxonomy_routes import register_taxonomy_routes
from . import v1_bp

register_taxonomy_routes(v1_bp, CATEGORY)
