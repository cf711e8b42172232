import dataclasses
import json
import logging
import pathlib

import numpy as np

from enigma_m3 import wiring
from enigma_m3.enigma import ALPHABET, N_LETTERS, N_ROTORS, Enigma, InvalidConfiguration

logger = logging.getLogger(__name__)


def normalise_plugboard_pairs(pairs) -> list:
    """upper case everything and keep only the entries that are two different letters"""
    normalised = []
    for pair in pairs:
        if not isinstance(pair, str):
            continue
        pair = pair.upper()
        if len(pair) == 2 and pair[0] != pair[1] and all(char in ALPHABET for char in pair):
            normalised.append(pair)
    return normalised


@dataclasses.dataclass
class EnigmaSettings:
    """Everything an operator sets up before typing the first letter."""

    rotors: list = dataclasses.field(default_factory=lambda: list(wiring.DEFAULT_ROTORS))
    reflector: str = wiring.DEFAULT_REFLECTOR
    positions: list = dataclasses.field(default_factory=lambda: list(wiring.DEFAULT_POSITIONS))
    plugboard_pairs: list = dataclasses.field(default_factory=list)

    def build(self) -> Enigma:
        return wiring.create_enigma(self.rotors, self.reflector, self.positions, self.plugboard_pairs)

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'EnigmaSettings':
        if not isinstance(data, dict):
            raise InvalidConfiguration(f'settings must be a mapping, got {type(data).__name__}')

        kwargs = dict()
        for field in dataclasses.fields(cls):
            if field.name not in data:
                continue
            value = data[field.name]
            if field.name == 'reflector':
                if not isinstance(value, str):
                    raise InvalidConfiguration(f'reflector must be a string, got {value!r}')
            else:
                # 'AAA' is accepted as shorthand for ['A', 'A', 'A']
                if field.name == 'positions' and isinstance(value, str):
                    value = list(value)
                if not isinstance(value, (list, tuple)):
                    raise InvalidConfiguration(f'{field.name} must be a list, got {value!r}')
                value = list(value)
            kwargs[field.name] = value

        if 'plugboard_pairs' in kwargs:
            kwargs['plugboard_pairs'] = normalise_plugboard_pairs(kwargs['plugboard_pairs'])
        return cls(**kwargs)


def load_settings(path) -> EnigmaSettings:
    path = pathlib.Path(path)
    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except (json.JSONDecodeError, UnicodeDecodeError) as err:
        raise InvalidConfiguration(f'{path} is not a valid json settings file: {err}') from err
    logger.debug('loaded settings from %s', path)
    return EnigmaSettings.from_dict(data)


def save_settings(settings: EnigmaSettings, path):
    path = pathlib.Path(path)
    path.write_text(json.dumps(settings.to_dict(), indent=2), encoding='utf-8')
    logger.debug('saved settings to %s', path)


def gen_plug_pairs(n_pairs: int, rng: np.random.Generator) -> list:
    elements = list(ALPHABET)

    # one end of every cable first, the other ends come from the letters still free
    firsts = rng.choice(elements, size=n_pairs, replace=False)
    for el in firsts:
        elements.remove(el)
    seconds = rng.choice(elements, size=n_pairs, replace=False)

    return [str(first) + str(second) for first, second in zip(firsts, seconds)]


def random_settings(seed=None, n_pairs: int = 10) -> EnigmaSettings:
    """
    A random key, e.g. for a key sheet.

    :param seed: seed for numpy's default_rng, None draws fresh entropy
    :param n_pairs: number of plug cables, 0 to 13
    """
    if not 0 <= n_pairs <= N_LETTERS // 2:
        raise InvalidConfiguration(f'between 0 and {N_LETTERS // 2} plug pairs possible, got {n_pairs}')
    rng = np.random.default_rng(seed)

    rotors = rng.choice(wiring.get_available_rotor_ids(), size=N_ROTORS, replace=False)
    reflector = rng.choice(wiring.get_available_reflector_ids())
    positions = rng.choice(list(ALPHABET), size=N_ROTORS)

    return EnigmaSettings(rotors=[str(rot) for rot in rotors],
                          reflector=str(reflector),
                          positions=[str(pos) for pos in positions],
                          plugboard_pairs=gen_plug_pairs(n_pairs, rng))
