import random
import time

import tqdm

from enigma_m3.enigma import ALPHABET
from enigma_m3.settings import EnigmaSettings


def time_encoding(n_messages: int = 3000, chars_per_message: int = 256, settings: EnigmaSettings = None,
                  seed=None, disable_tqdm=False) -> float:
    """:return: average time in seconds to encode one message"""
    if n_messages < 1:
        raise ValueError('need at least one message to time')
    if settings is None:
        settings = EnigmaSettings(plugboard_pairs=['AQ', 'BT', 'CE', 'DX', 'FM'])

    encoder = settings.build()
    rng = random.Random(seed)
    messages = [''.join(rng.choices(ALPHABET, k=chars_per_message)) for _ in range(n_messages)]

    tick = time.time()
    for message in tqdm.tqdm(messages, disable=disable_tqdm):
        encoder.set_positions(settings.positions)
        encoder.encipher_text(message)
    tock = time.time()

    return (tock - tick) / n_messages


if __name__ == '__main__':
    chars_per_message = 256
    avg_time = time_encoding(chars_per_message=chars_per_message)
    print(f'Average encoding time for message with {chars_per_message} characters: {avg_time:.2e} seconds')
