"""The Command Line Interface for the utility.

Exposes key generation and the four raw operations over integers. Integers are accepted in any Python literal base
(`0x...`, `0o...`, `0b...` or decimal).

Typical usage example:

    rawrsa keygen --bits 1024
    rawrsa encrypt --n 0xC0FFEE... 42
    python -m rawrsa decrypt --n 0xC0FFEE... --d 0x5EC... 1234
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import typing

import rawrsa


def integer(text: str) -> int:
    """Parse an integer literal in any base Python understands."""
    try:
        return int(text, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from exc


class HelpData(typing.NamedTuple):
    description: str
    default: typing.Any = None


help_dict: dict[str, HelpData] = {
    "keygen": HelpData("Generate a key pair and print its components."),
    "encrypt": HelpData("Raw public-key encryption, value^e mod n."),
    "verify": HelpData("Raw public-key verification, value^e mod n."),
    "decrypt": HelpData("Raw private-key decryption, value^d mod n."),
    "sign": HelpData("Raw private-key signature, value^d mod n."),
    "bits": HelpData("Modulus size (in bits).", 2048),
    "max_rounds": HelpData("Give up after this many sampling rounds. Unbounded by default."),
    "hex": HelpData("Print integers in hexadecimal."),
    "modulus": HelpData("The modulus n."),
    "pub_exponent": HelpData("The public exponent e.", rawrsa.PUBLIC_EXPONENT),
    "priv_exponent": HelpData("The private exponent d."),
    "value": HelpData("The integer to process."),
}

modulus = argparse.ArgumentParser(add_help=False)
modulus.add_argument("--n", "-N", type=integer, required=True, help=help_dict["modulus"].description)
modulus.add_argument("value", type=integer, help=help_dict["value"].description)
pubexp = argparse.ArgumentParser(add_help=False)
pubexp.add_argument("--e", "-e", type=integer, default=help_dict["pub_exponent"].default,
                    help=help_dict["pub_exponent"].description)
privexp = argparse.ArgumentParser(add_help=False)
privexp.add_argument("--d", "-d", type=integer, required=True, help=help_dict["priv_exponent"].description)
output = argparse.ArgumentParser(add_help=False)
output.add_argument("--hex", "-x", action="store_true", help=help_dict["hex"].description)

corep = argparse.ArgumentParser(prog="rawrsa")
corep.add_argument("--version", "-V", action="version", version=f"%(prog)s {rawrsa.__version__}")
corep.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands", required=True)

keygen = commands.add_parser("keygen", parents=[output], help=help_dict["keygen"].description)
keygen.add_argument("--bits", "-b", type=integer, default=help_dict["bits"].default,
                    help=help_dict["bits"].description)
keygen.add_argument("--max-rounds", type=integer, help=help_dict["max_rounds"].description)
for name in ("encrypt", "verify"):
    commands.add_parser(name, parents=[modulus, pubexp, output], help=help_dict[name].description)
for name in ("decrypt", "sign"):
    commands.add_parser(name, parents=[modulus, pubexp, privexp, output], help=help_dict[name].description)


def render(value: int, as_hex: bool) -> str:
    return hex(value) if as_hex else str(value)


def main(argv: list[str] | None = None) -> None:
    """Command line entry point."""
    args = corep.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    try:
        match args.subcommand:
            case "keygen":
                pub, priv = rawrsa.generate_random_keys(args.bits, max_rounds=args.max_rounds)
                p, q, _ = priv.factors
                for label, value in (("e", pub.e), ("n", pub.n), ("d", priv.d), ("p", p), ("q", q)):
                    print(f"{label}={render(value, args.hex)}")
            case "encrypt" | "verify":
                pub = rawrsa.PublicKey(args.e, args.n)
                print(render(getattr(pub, args.subcommand)(args.value), args.hex))
            case "decrypt" | "sign":
                priv = rawrsa.PrivateKey(args.d, rawrsa.PublicKey(args.e, args.n))
                print(render(getattr(priv, args.subcommand)(args.value), args.hex))
    except (ValueError, RuntimeError) as exc:
        corep.error(str(exc))


if __name__ == "__main__":
    main()
