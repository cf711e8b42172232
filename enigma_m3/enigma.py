import dataclasses
import logging
import string

import numpy as np

from enigma_m3 import signal_path

ALPHABET = string.ascii_uppercase
N_LETTERS = len(ALPHABET)
N_ROTORS = 3

_LETTER_TO_NUMBER = {char: i for i, char in enumerate(ALPHABET)}

logger = logging.getLogger(__name__)


class EnigmaError(ValueError):
    pass


class InvalidConfiguration(EnigmaError):
    """a component or machine was put together from parts that do not fit"""


class InvalidInput(EnigmaError):
    """a single operation got a character it cannot work with"""


def is_letter(char) -> bool:
    return isinstance(char, str) and len(char) == 1 and char.upper() in _LETTER_TO_NUMBER


def char_to_number(char: str) -> int:
    if not is_letter(char):
        raise InvalidInput(f'{char!r} is not a letter of the alphabet')
    return _LETTER_TO_NUMBER[char.upper()]


def wiring_to_numbers(wiring: str) -> np.ndarray:
    if len(wiring) != N_LETTERS:
        raise InvalidConfiguration(f'wiring must have {N_LETTERS} letters, got {len(wiring)}')
    if not all(is_letter(char) for char in wiring):
        raise InvalidConfiguration(f'wiring {wiring!r} contains characters outside the alphabet')
    return np.array([_LETTER_TO_NUMBER[char.upper()] for char in wiring])


@dataclasses.dataclass(frozen=True)
class RotorSpec:
    rotor_id: str
    wiring: str
    notch: str


@dataclasses.dataclass(frozen=True)
class ReflectorSpec:
    reflector_id: str
    wiring: str


class Rotor:
    def __init__(self, spec: RotorSpec, position: int = 0):
        connected_forward = wiring_to_numbers(spec.wiring)
        if len(np.unique(connected_forward)) != N_LETTERS:
            raise InvalidConfiguration(f'wiring of rotor {spec.rotor_id} is not a permutation of the alphabet')
        if not is_letter(spec.notch):
            raise InvalidConfiguration(f'notch of rotor {spec.rotor_id} must be a single letter, got {spec.notch!r}')

        self.spec = spec
        self.n_positions = N_LETTERS
        self.notch = char_to_number(spec.notch)
        self.position = 0
        self.set_position(position)

        positions = np.arange(self.n_positions)
        connected_backward = np.argsort(connected_forward)

        # shift each contact adds to the signal at position A
        self.forward_adds = connected_forward - positions
        self.backward_adds = connected_backward - positions

    @property
    def rotor_id(self) -> str:
        return self.spec.rotor_id

    @property
    def wiring(self) -> str:
        return self.spec.wiring

    @property
    def position_letter(self) -> str:
        return ALPHABET[self.position]

    def rotate(self):
        self.position = (self.position + 1) % self.n_positions

    def is_at_notch(self) -> bool:
        return self.position == self.notch

    def set_position(self, pos):
        """
        :param pos: the letter that should show in the window, or its index (taken modulo 26)
        """
        if isinstance(pos, (int, np.integer)) and not isinstance(pos, bool):
            self.position = int(pos) % self.n_positions
        else:
            self.position = char_to_number(pos)

    def get_permuted_output_forward(self, input_: int) -> int:
        contact = (input_ + self.position) % self.n_positions
        return int((input_ + self.forward_adds[contact]) % self.n_positions)

    def get_permuted_output_backward(self, input_: int) -> int:
        contact = (input_ + self.position) % self.n_positions
        return int((input_ + self.backward_adds[contact]) % self.n_positions)

    def forward(self, letter: str) -> str:
        return ALPHABET[self.get_permuted_output_forward(char_to_number(letter))]

    def backward(self, letter: str) -> str:
        return ALPHABET[self.get_permuted_output_backward(char_to_number(letter))]

    def clone(self) -> 'Rotor':
        return Rotor(self.spec, self.position)

    def __repr__(self) -> str:
        return f'<Rotor {self.rotor_id} pos={self.position_letter}>'


class Reflector:
    def __init__(self, spec: ReflectorSpec):
        connections = wiring_to_numbers(spec.wiring)
        positions = np.arange(N_LETTERS)
        # every letter has to be paired with exactly one other letter
        if not np.all(connections[connections] == positions):
            raise InvalidConfiguration(f'wiring of reflector {spec.reflector_id} is not an involution')
        if np.any(connections == positions):
            raise InvalidConfiguration(f'wiring of reflector {spec.reflector_id} maps a letter to itself')

        self.spec = spec
        self.n_positions = N_LETTERS
        self.connections = connections

    @property
    def reflector_id(self) -> str:
        return self.spec.reflector_id

    def get_output(self, input_: int) -> int:
        return int(self.connections[input_])

    def reflect(self, letter: str) -> str:
        if not is_letter(letter):
            return letter
        return ALPHABET[self.get_output(char_to_number(letter))]

    def __repr__(self) -> str:
        return f'<Reflector {self.reflector_id}>'


class Plugboard:
    def __init__(self, pairs=()):
        """
        :param pairs: strings like 'AR'. Anything that is not two different letters is dropped,
        a later pair that reuses a letter replaces the earlier pair holding it
        """
        self.n_positions = N_LETTERS
        self.swap_dict = {el: el for el in range(self.n_positions)}

        for pair in pairs:
            elements = self._parse_pair(pair)
            if elements is None:
                logger.debug('dropping plugboard pair %r', pair)
                continue
            self.set_element_swap(*elements)

    @staticmethod
    def _parse_pair(pair):
        if not isinstance(pair, str) or len(pair) != 2:
            return None
        if not (is_letter(pair[0]) and is_letter(pair[1])):
            return None
        e1, e2 = char_to_number(pair[0]), char_to_number(pair[1])
        if e1 == e2:
            return None
        return e1, e2

    def set_element_swap(self, e1: int, e2: int):
        # release old partners so the board stays symmetric
        for el in (e1, e2):
            partner = self.swap_dict[el]
            self.swap_dict[partner] = partner
            self.swap_dict[el] = el
        self.swap_dict[e1] = e2
        self.swap_dict[e2] = e1

    def get_output(self, input_: int) -> int:
        return self.swap_dict[input_]

    def swap(self, letter: str) -> str:
        if not is_letter(letter):
            return letter
        return ALPHABET[self.get_output(char_to_number(letter))]

    def is_connected(self, letter: str) -> bool:
        if not is_letter(letter):
            return False
        el = char_to_number(letter)
        return self.get_output(el) != el

    @property
    def pairs(self) -> list:
        return [ALPHABET[e1] + ALPHABET[e2] for e1, e2 in sorted(self.swap_dict.items()) if e1 < e2]

    def __repr__(self) -> str:
        return f'<Plugboard {" ".join(self.pairs)}>'


class Enigma:
    def __init__(self, rotors, plugboard: Plugboard, reflector: Reflector):
        """
        :param rotors: left, middle and right rotor, in that order
        """
        rotors = list(rotors)
        if len(rotors) != N_ROTORS:
            raise InvalidConfiguration(f'the M3 takes exactly {N_ROTORS} rotors, got {len(rotors)}')
        self.rotors = rotors
        self.plug_board = plugboard
        self.reflector = reflector

    @property
    def left_rotor(self) -> Rotor:
        return self.rotors[0]

    @property
    def middle_rotor(self) -> Rotor:
        return self.rotors[1]

    @property
    def right_rotor(self) -> Rotor:
        return self.rotors[2]

    def set_positions(self, positions):
        positions = list(positions)
        if len(positions) != N_ROTORS:
            raise InvalidConfiguration(f'{N_ROTORS} positions required (left, middle, right), got {len(positions)}')
        # check all of them before touching any rotor
        numbers = [char_to_number(pos) for pos in positions]
        for rot, number in zip(self.rotors, numbers):
            rot.set_position(number)

    def get_positions(self) -> list:
        return [rot.position_letter for rot in self.rotors]

    def rotate_position(self, rotor_idx: int, direction: int = 1):
        """turn a single rotor by hand, nothing gets enciphered and no other rotor moves"""
        if rotor_idx not in range(N_ROTORS):
            raise InvalidConfiguration(f'rotor index must be in 0..{N_ROTORS - 1}, got {rotor_idx}')
        if direction not in (-1, 1):
            raise InvalidConfiguration(f'direction must be 1 or -1, got {direction}')
        rot = self.rotors[rotor_idx]
        rot.set_position(rot.position + direction)

    def _step_rotors(self):
        left, middle, right = self.rotors
        # both notches are read before anything moves
        middle_at_notch = middle.is_at_notch()
        right_at_notch = right.is_at_notch()

        # double step: the middle rotor takes the left one along and moves itself again
        if middle_at_notch:
            middle.rotate()
            left.rotate()
        if right_at_notch:
            middle.rotate()
        right.rotate()

        logger.debug('stepped rotors to %s (middle notch=%s, right notch=%s)',
                     ''.join(self.get_positions()), middle_at_notch, right_at_notch)

    def _permutations(self) -> tuple:
        left, middle, right = self.rotors
        return (
            self.plug_board.get_output,
            right.get_permuted_output_forward,
            middle.get_permuted_output_forward,
            left.get_permuted_output_forward,
            self.reflector.get_output,
            left.get_permuted_output_backward,
            middle.get_permuted_output_backward,
            right.get_permuted_output_backward,
            self.plug_board.get_output,
        )

    def _route(self, number: int, trace: signal_path.SignalTrace = None) -> int:
        first_stage, *inner_stages, last_stage = signal_path.STAGES
        if trace is not None:
            trace.record(first_stage, number, number)
        for stage, permute in zip(inner_stages, self._permutations()):
            output = permute(number)
            if trace is not None:
                trace.record(stage, number, output)
            number = output
        if trace is not None:
            trace.record(last_stage, number, number)
        return number

    def encipher_char(self, letter: str) -> str:
        if not is_letter(letter):
            return letter
        self._step_rotors()
        return ALPHABET[self._route(char_to_number(letter))]

    def encipher_char_with_trace(self, letter: str):
        """
        :return: the enciphered letter and the signal path it took. Non-letters come back unchanged
        with an empty path and the rotors do not move.
        """
        if not is_letter(letter):
            return letter, signal_path.SignalPath((), letter, letter)
        self._step_rotors()
        trace = signal_path.SignalTrace(ALPHABET)
        number = self._route(char_to_number(letter), trace)
        return ALPHABET[number], trace.to_path()

    def encipher_text(self, input_: str) -> str:
        output = str()
        for char in input_:
            output += self.encipher_char(char)
        return output

    def __repr__(self) -> str:
        rotor_ids = '-'.join(rot.rotor_id for rot in self.rotors)
        return (f'<Enigma {rotor_ids} reflector={self.reflector.reflector_id} '
                f'pos={"".join(self.get_positions())} plugs={" ".join(self.plug_board.pairs)}>')
