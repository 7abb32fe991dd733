"""Translation engine: resolution, completeness, slugs and lifecycle.

The resolver and completeness modules are pure functions over the
capability protocols in ``modules.content.domain.types``; the slug generator
and lifecycle service work through the repository and language registry.
"""
