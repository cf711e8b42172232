import argparse
import logging
import sys

from enigma_m3 import wiring
from enigma_m3.enigma import EnigmaError
from enigma_m3.settings import EnigmaSettings, load_settings, random_settings, save_settings

LOG_FORMAT = '[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s'


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog='enigma-m3', description='Encipher or decipher text with an Enigma M3')
    p.add_argument('-m', '--message', metavar='TEXT',
                   help='Text to encipher. If omitted, an interactive prompt starts.')
    p.add_argument('--rotors', nargs=3, metavar=('LEFT', 'MIDDLE', 'RIGHT'), help='Rotor ids, e.g. I II III')
    p.add_argument('--reflector', help='Reflector id, B or C')
    p.add_argument('--positions', nargs=3, metavar=('LEFT', 'MIDDLE', 'RIGHT'), help='Start letters, e.g. A A A')
    p.add_argument('--plugs', nargs='*', metavar='PAIR', help='Plugboard pairs, e.g. AQ BT')
    key_source = p.add_mutually_exclusive_group()
    key_source.add_argument('--config', metavar='FILE',
                            help='Load machine settings from JSON. Flags given as well win.')
    key_source.add_argument('--random-key', dest='random_key', type=int, metavar='SEED',
                            help='Start from a random key drawn with this seed instead of the defaults.')
    p.add_argument('--save-config', dest='save_config', metavar='FILE', help='Write the used settings to JSON.')
    p.add_argument('--trace', action='store_true', help='Print the signal path of every letter.')
    p.add_argument('--list', action='store_true', help='List the available rotors and reflectors and exit.')
    p.add_argument('-v', '--verbose', action='store_true', help='Debug logging of stepping and setup.')
    return p.parse_args(argv)


def build_settings(args: argparse.Namespace) -> EnigmaSettings:
    if args.config:
        settings = load_settings(args.config)
    elif args.random_key is not None:
        settings = random_settings(args.random_key)
    else:
        settings = EnigmaSettings()

    if args.rotors:
        settings.rotors = list(args.rotors)
    if args.reflector:
        settings.reflector = args.reflector
    if args.positions:
        settings.positions = list(args.positions)
    if args.plugs is not None:
        settings.plugboard_pairs = list(args.plugs)
    return settings


def encipher(machine, text: str, trace: bool = False, out=None) -> str:
    if not trace:
        return machine.encipher_text(text)
    if out is None:
        out = sys.stdout

    output = str()
    for char in text:
        enciphered, path = machine.encipher_char_with_trace(char)
        if path.steps:
            print(path.format(), file=out)
        output += enciphered
    return output


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    if args.list:
        print('rotors:', ' '.join(wiring.get_available_rotor_ids()))
        print('reflectors:', ' '.join(wiring.get_available_reflector_ids()))
        return 0

    try:
        settings = build_settings(args)
        machine = settings.build()
        if args.save_config:
            save_settings(settings, args.save_config)
    except (EnigmaError, OSError) as err:
        print(f'error: {err}', file=sys.stderr)
        return 2

    # one-shot mode
    if args.message is not None:
        print(encipher(machine, args.message, args.trace))
        return 0

    # interactive, the rotors keep turning from line to line like on the real machine
    print(f'{machine!r}')
    print('Type blank line to quit.')
    while True:
        try:
            text = input(f'[{"".join(machine.get_positions())}] > ')
        except EOFError:
            break
        if not text.strip():
            break
        print(encipher(machine, text, args.trace))
    return 0


if __name__ == '__main__':
    sys.exit(main())
