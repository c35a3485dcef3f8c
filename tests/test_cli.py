# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest

import rawrsa
from rawrsa import __main__ as cli

P, Q, E, D = 61, 53, 17, 2753
N = P * Q


def parse_components(text: str) -> dict[str, int]:
    return {k: int(v, 0) for k, v in (line.split("=", 1) for line in text.splitlines())}


def test_keygen(capsys):
    cli.main(["keygen", "--bits", "256"])
    comps = parse_components(capsys.readouterr().out)
    assert set(comps) == {"e", "n", "d", "p", "q"}
    assert comps["e"] == 65537
    assert comps["n"].bit_length() == 256
    assert comps["p"] * comps["q"] == comps["n"]
    assert pow(pow(42, comps["e"], comps["n"]), comps["d"], comps["n"]) == 42


def test_keygen_hex(capsys):
    cli.main(["keygen", "-b", "128", "--hex"])
    lines = capsys.readouterr().out.splitlines()
    assert all(line.split("=", 1)[1].startswith("0x") for line in lines)


def test_keygen_max_rounds_exhausted(mocker, capsys):
    mocker.patch("rawrsa.primes.probable_prime", return_value=262139)
    with pytest.raises(SystemExit) as exc:
        cli.main(["keygen", "--bits", "35", "--max-rounds", "2"])
    assert exc.value.code == 2
    assert "No valid 35-bit key pair found in 2 rounds." in capsys.readouterr().err


def test_keygen_integer_literals(mocker, capsys):
    spy = mocker.spy(rawrsa, "generate_random_keys")
    cli.main(["keygen", "--bits", "0x80", "--max-rounds", "0o1750"])
    assert spy.call_args.args == (128,)
    assert spy.call_args.kwargs == {"max_rounds": 1000}
    assert parse_components(capsys.readouterr().out)["n"].bit_length() == 128


@pytest.mark.parametrize("flag", ["--bits", "--max-rounds"])
def test_keygen_invalid_integer(capsys, flag):
    with pytest.raises(SystemExit) as exc:
        cli.main(["keygen", flag, "abc"])
    assert exc.value.code == 2
    assert "invalid integer: 'abc'" in capsys.readouterr().err


@pytest.mark.parametrize("cmd,value,expected", [("encrypt", "65", 2790), ("verify", "588", 65)])
def test_public_operations(capsys, cmd, value, expected):
    cli.main([cmd, "--n", str(N), "--e", str(E), value])
    assert int(capsys.readouterr().out) == expected


@pytest.mark.parametrize("cmd,value,expected", [("decrypt", "2790", 65), ("sign", "65", 588)])
def test_private_operations(capsys, cmd, value, expected):
    cli.main([cmd, "--n", hex(N), "--e", str(E), "--d", hex(D), value])
    assert int(capsys.readouterr().out) == expected


def test_default_exponent(capsys):
    pub, priv = rawrsa.generate_random_keys(128)
    cli.main(["encrypt", "--n", str(pub.n), "--hex", "42"])
    ciphertext = capsys.readouterr().out.strip()
    assert ciphertext.startswith("0x")
    cli.main(["decrypt", "--n", str(pub.n), "--d", str(priv.d), ciphertext])
    assert int(capsys.readouterr().out) == 42


def test_invalid_integer(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["encrypt", "--n", "not-a-number", "42"])
    assert exc.value.code == 2
    assert "invalid integer" in capsys.readouterr().err


def test_invalid_key(capsys):
    # e = 65537 exceeds this modulus.
    with pytest.raises(SystemExit) as exc:
        cli.main(["encrypt", "--n", str(N), "42"])
    assert exc.value.code == 2
    assert "Public exponent" in capsys.readouterr().err


def test_missing_subcommand():
    with pytest.raises(SystemExit) as exc:
        cli.main([])
    assert exc.value.code == 2


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--version"])
    assert exc.value.code == 0
    assert rawrsa.__version__ in capsys.readouterr().out
