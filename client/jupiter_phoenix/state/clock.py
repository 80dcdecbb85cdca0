from podite import pod, U64, I64

from jupiter_phoenix.errors import ClockDecodeError


@pod
class Clock:
    slot: U64
    epoch_start_timestamp: I64
    epoch: U64
    leader_schedule_epoch: U64
    unix_timestamp: I64

    @classmethod
    def to_bytes(cls, obj, **kwargs):
        return cls.pack(obj, converter="bytes", **kwargs)

    @classmethod
    def from_bytes(cls, raw, **kwargs):
        size = cls.calc_size()
        if len(raw) < size:
            raise ClockDecodeError(f"clock sysvar is {len(raw)} bytes, needs {size}")
        return cls.unpack(raw[:size], converter="bytes", **kwargs)
