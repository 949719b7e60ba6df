from enum import IntEnum

from fpgadense.models.exceptions import InvalidConfigurationError

# activation selector codes used by the hardware
class ACTIVATION(IntEnum):
    NONE         = 0
    RELU         = 1
    HARD_TANH    = 2
    HARD_SIGMOID = 3

    @classmethod
    def get_type(cls, t):
        """
        Resolve an activation selector given as an enum member, an integer
        code or a (case-insensitive) name such as "relu" or "hard_tanh".
        """
        try:
            if isinstance(t, cls):
                return t
            elif isinstance(t, str):
                return cls[t.strip().upper().replace("-", "_")]
            elif isinstance(t, int) and not isinstance(t, bool):
                return cls(t)
        except (KeyError, ValueError):
            pass
        raise InvalidConfigurationError(f"invalid activation selector: {t!r}")
