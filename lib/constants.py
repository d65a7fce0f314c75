from lib.types import PriceZone


PRICE_ZONES: tuple[PriceZone, ...] = ("SE1", "SE2", "SE3", "SE4")
CHARGING_WINDOWS: tuple[int, ...] = (2, 4, 8)  # suggested, any positive length is accepted
HOURS_IN_DAY: int = 24
ORE_PER_SEK: int = 100
