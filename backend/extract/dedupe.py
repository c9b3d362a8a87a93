from models import VariantOption


def option_key(option: VariantOption) -> str:
    price = f"{option.price:.2f}" if option.price is not None else ""
    return "|".join(
        [
            option.sku_id,
            option.variant_text or "",
            price,
            option.spec_key(),
            option.attribute_key(),
        ]
    )


def dedupe_options(options: list[VariantOption]) -> list[VariantOption]:
    """Keep the first option per canonical key, preserving order. Options without a sku id are dropped."""
    seen: set[str] = set()
    out: list[VariantOption] = []
    for option in options:
        if not option.sku_id:
            continue
        key = option_key(option)
        if key in seen:
            continue
        seen.add(key)
        out.append(option)
    return out
