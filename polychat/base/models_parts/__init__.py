"""Models parts package.

One module per DTO. Import through `polychat.base.models` for the stable
surface; this package intentionally re-exports nothing so that wire modules can
import individual DTOs without pulling in the provider bindings.
"""
