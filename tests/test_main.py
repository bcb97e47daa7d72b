"""Tests for the sshutil command line tool."""

import base64
import io

import paramiko
import pytest
from click.testing import CliRunner

from sshutil import debug
from sshutil import keys
from sshutil import main
from sshutil import prompt
from sshutil.keys import signer as ksigner

from conftest import key_path, read_pub


@pytest.fixture
def answers(monkeypatch):
    """Feed passphrase prompts from a list of answers."""
    def feed(*lines):
        inp = io.StringIO(''.join(line + '\n' for line in lines))
        p = prompt.IOPrompter(inp, io.StringIO())
        monkeypatch.setattr(prompt, 'STD_PROMPTER', p)
        return p
    return feed


def run(*args):
    return CliRunner().invoke(main.sshutil, list(args))


def test_pubkey():
    result = run('pubkey', '-k', key_path('ecdsa'))
    assert result.exit_code == 0
    assert result.output.strip() == '{} {}'.format(*read_pub('ecdsa'))


def test_pub_alias():
    result = run('pub', '-k', key_path('openssh'))
    assert result.exit_code == 0
    assert result.output.strip() == '{} {}'.format(*read_pub('openssh'))


def test_pubkey_prompts_for_encrypted_key(answers, password):
    p = answers(password)
    result = run('pubkey', '-k', key_path('rsa_enc'))
    assert result.exit_code == 0
    assert result.output.strip() == '{} {}'.format(*read_pub('rsa_enc'))
    assert 'Enter passphrase for' in p.out.getvalue()


def test_pubkey_password_flag(answers, password):
    answers(password)
    result = run('pubkey', '-p', '-k', key_path('dsa_enc'))
    assert result.exit_code == 0
    assert result.output.strip() == '{} {}'.format(*read_pub('dsa_enc'))


def test_pubkey_reprompts(answers, password):
    p = answers('wrong', password)
    result = run('pubkey', '-k', key_path('ecdsa_enc'))
    assert result.exit_code == 0
    assert p.out.getvalue().count('Enter passphrase for') == 2
    assert '{} {}'.format(*read_pub('ecdsa_enc')) in result.output


def test_pubkey_gives_up(answers):
    answers('wrong', 'wronger', 'wrongest', 'never asked')
    result = run('pubkey', '-k', key_path('rsa_enc'))
    assert result.exit_code != 0
    assert 'decryption failed' in result.output


def test_pubkey_missing_file():
    result = run('pubkey', '-k', key_path('nonexistant'))
    assert result.exit_code != 0
    assert 'sshutil: key error' in result.output


def test_sign(tmp_path):
    infile = tmp_path / 'data'
    infile.write_bytes(b'sign me')
    result = run('sign', '-k', key_path('rsa'), str(infile))
    assert result.exit_code == 0

    m = paramiko.Message(base64.b64decode(result.output.strip()))
    sig = ksigner.Signature(m.get_text(), m.get_string())
    assert sig.format == 'rsa-sha2-256'

    pub = keys.key(key_path('rsa')).signer().public_key()
    assert pub.verify(b'sign me', sig)


def test_agent_keys(agent_socket):
    result = run('agent-keys', '-s', agent_socket)
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines == ['{} {}'.format(*read_pub('rsa')),
                     '{} {}'.format(*read_pub('ecdsa'))]


def test_agent_keys_unreachable():
    result = run('agent-keys', '-s', '/tmp/sshutil_test_main_no_agent.sock')
    assert result.exit_code != 0
    assert 'cannot reach ssh agent' in result.output


def test_debug_flag():
    result = run('-d', 'pubkey', '-k', key_path('rsa'))
    assert result.exit_code == 0
    assert debug.get_debug() is not None


def test_help_lists_aliases():
    result = run('--help')
    assert result.exit_code == 0
    for name in ('pubkey', 'pub', 'sign', 'agent-keys'):
        assert name in result.output
