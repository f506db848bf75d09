"""
Color-space conversions, sorting and luminosity bucketing utilities.
"""
import colorsys
import logging
import math
from enum import Enum
from typing import Callable, Dict, Iterable, List, NamedTuple, Tuple

logger = logging.getLogger(__name__)

MIN_GROUPS = 1
MAX_GROUPS = 4
DEFAULT_GROUP_COUNT = 1
STEP_REPETITIONS = 8

# Luminosity channel weights
LUMINOSITY_WEIGHTS = (0.241, 0.691, 0.068)


class ColorRecord(NamedTuple):
    """A titled color parsed from one input line."""
    title: str
    r: int
    g: int
    b: int

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @property
    def css(self) -> str:
        """Literal CSS color, out-of-range channels included."""
        return f"rgb({self.r},{self.g},{self.b})"

    @property
    def hex(self) -> str:
        """Hex code with channels clamped to 0-255 for display."""
        r, g, b = (max(0, min(255, c)) for c in self.rgb)
        return f"#{r:02X}{g:02X}{b:02X}"


class SortMethod(str, Enum):
    """Available orderings for the stripe list."""
    LUMINOSITY = 'luminosity'
    HSV = 'hsv'
    HLS = 'hls'
    STEP = 'step'
    INVERTED_STEP = 'invertedStep'

    @property
    def label(self) -> str:
        return SORT_METHOD_LABELS[self]

    @classmethod
    def parse(cls, value) -> 'SortMethod':
        """Resolve a member or its string value (e.g. 'invertedStep')."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ', '.join(m.value for m in cls)
            raise ValueError(f"Unknown sort method {value!r} (expected one of: {valid})") from None


SORT_METHOD_LABELS = {
    SortMethod.LUMINOSITY: 'Luminosity',
    SortMethod.HSV: 'HSV',
    SortMethod.HLS: 'HLS',
    SortMethod.STEP: 'Step Sorting',
    SortMethod.INVERTED_STEP: 'Inverted Step',
}


def luminosity(r, g, b) -> float:
    """Perceived brightness of raw (0-255) channel values.

    Not a calibrated colorimetric value, only a sort and bucket key. Channels
    are not normalized, so white scores sqrt(255) (about 15.97).
    """
    wr, wg, wb = LUMINOSITY_WEIGHTS
    return math.sqrt(wr * r + wg * g + wb * b)


def rgb_to_hsv(r, g, b) -> Tuple[float, float, float]:
    """Convert RGB (0-255) to HSV.

    Returns:
        Tuple of (hue [0-1], saturation [0-1], value [0-1])
    """
    return colorsys.rgb_to_hsv(r / 255.0, g / 255.0, b / 255.0)


def rgb_to_hls(r, g, b) -> Tuple[float, float, float]:
    """Convert RGB (0-255) to HLS.

    Returns:
        Tuple of (hue [0-1], lightness [0-1], saturation [0-1])
    """
    return colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)


def step_sort(r, g, b, repetitions=STEP_REPETITIONS) -> Tuple[int, int, int]:
    """Quantize a color into a (hue, luminosity, value) step triple.

    Hue, luminosity and value are bucketed into `repetitions` levels. On odd
    hue buckets the luminosity and value buckets are mirrored so that
    neighbouring hue sectors sweep in opposite directions.

    Luminosity is unnormalized, so its bucket usually has two digits and can
    go negative once mirrored.
    """
    lum = luminosity(r, g, b)
    h, s, v = rgb_to_hsv(r, g, b)

    h2 = math.floor(h * repetitions)
    lum2 = math.floor(lum * repetitions)
    v2 = math.floor(v * repetitions)

    if h2 % 2 == 1:
        v2 = repetitions - v2
        lum2 = repetitions - lum2

    return h2, lum2, v2


def step_sort_key(r, g, b, repetitions=STEP_REPETITIONS) -> str:
    """Comma-joined step triple, e.g. '0,62,8'.

    Step orderings compare this text, not the numeric triple: '0,11,0' sorts
    before '0,3,0'.
    """
    return ','.join(str(part) for part in step_sort(r, g, b, repetitions))


def record_luminosity(record: ColorRecord) -> float:
    return luminosity(*record.rgb)


def _hsv_hue(record: ColorRecord) -> float:
    return rgb_to_hsv(*record.rgb)[0]


def _hls_hue(record: ColorRecord) -> float:
    return rgb_to_hls(*record.rgb)[0]


def _step_key(record: ColorRecord) -> str:
    return step_sort_key(*record.rgb)


# method -> (sort key, descending)
SORT_KEYS: Dict[SortMethod, Tuple[Callable[[ColorRecord], object], bool]] = {
    SortMethod.LUMINOSITY: (record_luminosity, False),
    SortMethod.HSV: (_hsv_hue, False),
    SortMethod.HLS: (_hls_hue, False),
    SortMethod.STEP: (_step_key, False),
    SortMethod.INVERTED_STEP: (_step_key, True),
}

_missing = set(SortMethod) - set(SORT_KEYS)
if _missing:
    raise RuntimeError(f"No sort key registered for: {sorted(m.value for m in _missing)}")


def sort_colors(records: Iterable[ColorRecord], method=SortMethod.LUMINOSITY) -> List[ColorRecord]:
    """Return the records ordered by `method`.

    The sort is stable: records with equal keys keep their input order, in
    descending orderings as well.
    """
    key, descending = SORT_KEYS[SortMethod.parse(method)]
    return sorted(records, key=key, reverse=descending)


def group_by_luminosity(records: Iterable[ColorRecord], group_count: int) -> List[List[ColorRecord]]:
    """Split records into `group_count` luminosity bands.

    Each record goes to band floor(normalized_luminosity * group_count), with
    the brightest record clamped into the last band. Records keep their
    relative input order inside a band, so a non-luminosity sort can leave
    bands that are not monotonic in display order.

    Args:
        records: Records in display order
        group_count: Number of bands (>= 1)

    Returns:
        List of exactly `group_count` lists, some possibly empty
    """
    if group_count < MIN_GROUPS:
        raise ValueError(f"group_count must be at least {MIN_GROUPS}, got {group_count}")

    records = list(records)
    groups: List[List[ColorRecord]] = [[] for _ in range(group_count)]
    if not records:
        return groups

    lums = [record_luminosity(record) for record in records]
    min_lum = min(lums)
    lum_range = max(lums) - min_lum

    for record, lum in zip(records, lums):
        if lum_range == 0:
            index = 0
        else:
            index = math.floor(((lum - min_lum) / lum_range) * group_count)
            index = max(0, min(group_count - 1, index))
        groups[index].append(record)

    return groups


def sort_and_group(records: Iterable[ColorRecord], method=SortMethod.LUMINOSITY,
                   group_count: int = DEFAULT_GROUP_COUNT) -> List[List[ColorRecord]]:
    """Sort records by `method`, then band them by luminosity."""
    method = SortMethod.parse(method)
    ordered = sort_colors(records, method)
    groups = group_by_luminosity(ordered, group_count)
    logger.debug(
        "Sorted %d colors by %s into groups of sizes %s",
        len(ordered), method.value, [len(group) for group in groups]
    )
    return groups
