"""Translatable site content: features, testimonials, pricing plans and FAQs.

Callers use ``modules.content.service``; the engine lives in
``modules.content.core`` and persistence adapters in
``modules.content.infrastructure``.
"""
