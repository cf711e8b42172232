"""
The wheels that shipped with the M3 and helpers to build machines out of them.
"""
import logging

from enigma_m3.enigma import Enigma, InvalidConfiguration, Plugboard, Reflector, ReflectorSpec, Rotor, RotorSpec

logger = logging.getLogger(__name__)

ROTOR_SPECS = {
    'I': RotorSpec('I', 'EKMFLGDQVZNTOWYHXUSPAIBRCJ', 'Q'),
    'II': RotorSpec('II', 'AJDKSIRUXBLHWTMCQGZNPYFVOE', 'E'),
    'III': RotorSpec('III', 'BDFHJLCPRTXVZNYEIWGAKMUSQO', 'V'),
    'IV': RotorSpec('IV', 'ESOVPZJAYQUIRHXLNFTGKDCMWB', 'J'),
    'V': RotorSpec('V', 'VZBRGITYUPSDNHLXAWMJQOFECK', 'Z'),
}

REFLECTOR_SPECS = {
    'B': ReflectorSpec('B', 'YRUHQSLDPXNGOKMIEBFZCWVJAT'),
    'C': ReflectorSpec('C', 'FVPJIAOYEDRZXWGCTKUQSBNMHL'),
}

DEFAULT_ROTORS = ('I', 'II', 'III')
DEFAULT_REFLECTOR = 'B'
DEFAULT_POSITIONS = ('A', 'A', 'A')


def get_available_rotor_ids() -> list:
    return list(ROTOR_SPECS)


def get_available_reflector_ids() -> list:
    return list(REFLECTOR_SPECS)


def _lookup(specs: dict, spec_id, kind: str):
    key = spec_id.upper() if isinstance(spec_id, str) else spec_id
    try:
        return specs[key]
    except (KeyError, TypeError):
        raise InvalidConfiguration(f'unknown {kind} {spec_id!r}, available are {", ".join(specs)}') from None


def get_rotor_spec(rotor_id: str) -> RotorSpec:
    return _lookup(ROTOR_SPECS, rotor_id, 'rotor')


def get_reflector_spec(reflector_id: str) -> ReflectorSpec:
    return _lookup(REFLECTOR_SPECS, reflector_id, 'reflector')


def create_rotor(rotor_id: str, position='A') -> Rotor:
    return Rotor(get_rotor_spec(rotor_id), position)


def create_reflector(reflector_id: str) -> Reflector:
    return Reflector(get_reflector_spec(reflector_id))


def create_enigma(rotors=DEFAULT_ROTORS, reflector: str = DEFAULT_REFLECTOR, positions=DEFAULT_POSITIONS,
                  plugboard_pairs=()) -> Enigma:
    """
    Build a machine with fresh components.

    :param rotors: rotor ids from left to right, e.g. ['I', 'II', 'III']
    :param reflector: 'B' or 'C'
    :param positions: window letters from left to right
    :param plugboard_pairs: strings like 'AQ', malformed ones are ignored
    """
    machine = Enigma([create_rotor(rotor_id) for rotor_id in rotors],
                     Plugboard(plugboard_pairs),
                     create_reflector(reflector))
    machine.set_positions(positions)
    logger.debug('built %r', machine)
    return machine


def create_default() -> Enigma:
    return create_enigma()
