"""
In-memory sample store shared by the capture and playback engines.

Every tracked property keeps its own series of values, all indexed by a single
shared timestamp sequence: index i is the i-th sample of every series.
"""

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Tuple
import logging

from .errors import UnknownObjectId

logger = logging.getLogger(__name__)


class SampleType(Enum):
    """How a property is reconstructed between two samples."""
    DISCRETE = "discrete"      # Hold the left sample
    CONTINUOUS = "continuous"  # Linear interpolation

    @classmethod
    def from_spec(cls, value: Any) -> "SampleType":
        """Anything other than 'continuous' is treated as discrete."""
        if isinstance(value, SampleType):
            return value
        if value == cls.CONTINUOUS.value:
            return cls.CONTINUOUS
        return cls.DISCRETE


def read_property(obj: Any, name: str) -> Any:
    """Read a property by key from mappings, by attribute otherwise."""
    if isinstance(obj, Mapping):
        return obj[name]
    return getattr(obj, name)


def write_property(obj: Any, name: str, value: Any):
    """Write a property by key to mappings, by attribute otherwise."""
    if isinstance(obj, MutableMapping):
        obj[name] = value
    else:
        setattr(obj, name, value)


@dataclass
class PropertySpec:
    """A property to record and its sample type."""
    name: str
    sample_type: SampleType = SampleType.DISCRETE

    @classmethod
    def from_dict(cls, data: Any) -> "PropertySpec":
        if isinstance(data, PropertySpec):
            return data
        if isinstance(data, str):
            return cls(name=data)
        return cls(
            name=data["name"],
            sample_type=SampleType.from_spec(data.get("type")),
        )


@dataclass
class ObjectSpec:
    """An object to record from, with the properties to sample."""
    object_id: Any
    obj: Any
    properties: List[PropertySpec] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ObjectSpec":
        if isinstance(data, ObjectSpec):
            return data
        return cls(
            object_id=data["id"],
            obj=data["object"],
            properties=[PropertySpec.from_dict(p) for p in data.get("properties", [])],
        )


@dataclass
class ObjectMap:
    """Redirects playback of a recorded id onto another object."""
    object_id: Any
    obj: Any

    @classmethod
    def from_dict(cls, data: Any) -> "ObjectMap":
        if isinstance(data, ObjectMap):
            return data
        return cls(object_id=data["id"], obj=data["object"])


@dataclass
class PropertySeries:
    """Recorded values of one property of one object."""
    name: str
    sample_type: SampleType
    values: List[Any] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> Any:
        return self.values[index]

    def store(self, index: int, value: Any):
        """Store a value at the given slot, appending when it is the next one."""
        if index == len(self.values):
            self.values.append(value)
        else:
            self.values[index] = value


class TrackedObject:
    """
    A recorded entity.

    The recorded object is fixed for the lifetime of the recording. The played
    object is a separate, replaceable reference that playback writes into.
    """

    def __init__(self, object_id: Any, recorded_object: Any, properties: List[PropertySpec]):
        self._object_id = object_id
        self._recorded_object = recorded_object
        self._played_object = recorded_object
        self.series: Dict[str, PropertySeries] = {
            p.name: PropertySeries(name=p.name, sample_type=p.sample_type)
            for p in properties
        }

    @property
    def object_id(self) -> Any:
        return self._object_id

    @property
    def recorded_object(self) -> Any:
        return self._recorded_object

    @property
    def played_object(self) -> Any:
        return self._played_object

    def rebind(self, obj: Any):
        """Point playback at a different object."""
        self._played_object = obj

    def __repr__(self) -> str:
        return f"TrackedObject(id={self._object_id!r}, properties={list(self.series)})"


class SampleStore:
    """
    Tracked objects, the shared timestamp sequence, the sample cursor and the
    playhead of one session.
    """

    def __init__(self):
        self._objects: Dict[Any, TrackedObject] = {}
        self._timestamps: List[float] = []
        self.sample_index = 0
        self.playhead = 0.0

    def reset(self):
        """Drop every tracked object and sample."""
        self._objects = {}
        self._timestamps = []
        self.sample_index = 0
        self.playhead = 0.0

    def rewind(self):
        """Move the cursor and playhead back to the start, keeping the samples."""
        self.sample_index = 0
        self.playhead = 0.0

    def track(self, spec: ObjectSpec) -> TrackedObject:
        """Start tracking an object. A repeated id replaces the earlier entry."""
        if spec.object_id in self._objects:
            logger.warning(f"Object id {spec.object_id!r} tracked twice, keeping the last one")

        tracked = TrackedObject(spec.object_id, spec.obj, spec.properties)
        self._objects[spec.object_id] = tracked
        return tracked

    def get(self, object_id: Any) -> TrackedObject:
        """Get a tracked object by id."""
        try:
            return self._objects[object_id]
        except KeyError:
            raise UnknownObjectId(object_id) from None

    def rebind_all(self, maps: List[ObjectMap]):
        """
        Rebind the played objects of several ids.

        Every id is checked before anything is rebound, so an unknown id leaves
        all bindings untouched.
        """
        targets = [(self.get(m.object_id), m.obj) for m in maps]
        for tracked, obj in targets:
            tracked.rebind(obj)

    def append_timestamp(self, index: int, timestamp: float):
        if index == len(self._timestamps):
            self._timestamps.append(timestamp)
        else:
            self._timestamps[index] = timestamp

    def series(self, object_id: Any, name: str) -> PropertySeries:
        return self.get(object_id).series[name]

    def __iter__(self) -> Iterator[TrackedObject]:
        return iter(self._objects.values())

    def __contains__(self, object_id: Any) -> bool:
        return object_id in self._objects

    def __len__(self) -> int:
        return len(self._objects)

    @property
    def object_ids(self) -> List[Any]:
        return list(self._objects)

    @property
    def timestamps(self) -> Tuple[float, ...]:
        """Read-only view of the shared timestamp sequence."""
        return tuple(self._timestamps)

    @property
    def sample_count(self) -> int:
        return len(self._timestamps)

    @property
    def duration(self) -> float:
        """Time span covered by the recording."""
        if not self._timestamps:
            return 0.0
        return self._timestamps[-1] - self._timestamps[0]

    def timestamp_at(self, index: int) -> float:
        return self._timestamps[index]

    def to_dict(self) -> Dict[str, Any]:
        """Summary for logging and diagnostics."""
        return {
            "objects": [
                {
                    "id": tracked.object_id,
                    "properties": {
                        name: series.sample_type.value
                        for name, series in tracked.series.items()
                    },
                }
                for tracked in self._objects.values()
            ],
            "sample_count": self.sample_count,
            "duration": self.duration,
            "sample_index": self.sample_index,
            "playhead": self.playhead,
        }
