from enigma_m3.enigma import (
    ALPHABET,
    Enigma,
    EnigmaError,
    InvalidConfiguration,
    InvalidInput,
    Plugboard,
    Reflector,
    ReflectorSpec,
    Rotor,
    RotorSpec,
)
from enigma_m3.settings import EnigmaSettings, load_settings, random_settings, save_settings
from enigma_m3.signal_path import STAGES, SignalPath, SignalStep
from enigma_m3.wiring import (
    create_default,
    create_enigma,
    create_reflector,
    create_rotor,
    get_available_reflector_ids,
    get_available_rotor_ids,
    get_reflector_spec,
    get_rotor_spec,
)

__version__ = '0.1.0'
