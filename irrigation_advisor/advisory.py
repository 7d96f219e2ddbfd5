"""User-facing recommendation messages. Templates are data; rendering is formatting only."""

HIGH_HUMIDITY = "High humidity — irrigation not recommended."
RAIN_THIS_MORNING = "Raining this morning — wait until evening to reassess."
RAIN_THIS_EVENING = "Raining this evening — today's rain is sufficient."
RAIN_EXPECTED_EVENING = "Rain expected this evening — irrigate in the morning if not already done."
VERY_HIGH_TEMPERATURE = "Very high temperature — irrigate very early morning or late evening."

VOLUME_TEMPLATE = (
    "Apply {volume:.1f} L/m² ({total:.0f} L total) every {interval} days "
    "for {crop} ({stage}) on {soil} soil."
)

UNAVAILABLE_TEMPLATE = "recommendation unavailable: {reason}"


def volume_message(volume: float, total: float, interval: int, crop: str, stage: str, soil: str) -> str:
    return VOLUME_TEMPLATE.format(
        volume=volume, total=total, interval=interval, crop=crop, stage=stage, soil=soil
    )


def unavailable_message(reason) -> str:
    return UNAVAILABLE_TEMPLATE.format(reason=reason)
