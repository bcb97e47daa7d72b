#! /usr/bin/env python3
#
# Copyright 2026 LaczenJMS
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import base64
import logging

import click
import paramiko

from sshutil import agent as sshagent
from sshutil import debug
from sshutil import keys
from sshutil import prompt
from sshutil.errors import KeyFileError, NoPasswordSupplied, DecryptionFailed

PASSWORD_ATTEMPTS = 3

def get_password(keyfile):
    passwd = prompt.STD_PROMPTER.prompt(
        "Enter passphrase for {}: ".format(keyfile), echo=False)
    # Password must be bytes, always use UTF-8 for consistent
    # encoding.
    return passwd.encode('utf-8')

def load_key(keyfile, user, password):
    """Load keyfile, asking for its passphrase when the key turns out to be
    encrypted. Wrong passphrases are asked again."""
    path = keys.ssh_dir(keyfile) if user else keyfile
    passwd = get_password(path) if password else None
    attempts = 0
    while True:
        try:
            return keys.KeyPair(path, passwd).signer()
        except KeyFileError as e:
            if isinstance(e.err, NoPasswordSupplied):
                pass
            elif isinstance(e.err, DecryptionFailed) and attempts < PASSWORD_ATTEMPTS - 1:
                attempts += 1
                click.echo("Bad passphrase, try again", err=True)
            else:
                raise click.ClickException(str(e))
        passwd = get_password(path)

def key_options(f):
    f = click.option('-p', '--password', is_flag=True,
                     help='Prompt for the key passphrase up front')(f)
    f = click.option('-u', '--user', is_flag=True,
                     help='Resolve the key file relative to ~/.ssh')(f)
    f = click.option('-k', '--keyfile', metavar='filename', required=True)(f)
    return f

@key_options
@click.command(help='Print the authorized_keys line for a private key')
def pubkey(keyfile, user, password):
    signer = load_key(keyfile, user, password)
    click.echo(signer.public_key().authorized_key())

@click.argument('infile', type=click.File('rb'))
@key_options
@click.command(help='''Sign a file with a private key\n
               Prints the base64 encoded SSH signature of INFILE''')
def sign(keyfile, user, password, infile):
    signer = load_key(keyfile, user, password)
    sig = signer.sign(infile.read())
    click.echo(base64.b64encode(sig.marshal()).decode('ascii'))

@click.option('-s', '--socket', metavar='path', default=None,
              help='Agent socket, defaults to $SSH_AUTH_SOCK')
@click.command('agent-keys', help='List the identities held by the SSH agent')
def agent_keys(socket):
    try:
        if socket is None:
            agent = sshagent.std_agent()
        else:
            agent = sshagent.agent_with_socket(socket)
    except (OSError, paramiko.SSHException) as e:
        raise click.ClickException("cannot reach ssh agent: {}".format(e))
    try:
        for k in agent.get_keys():
            click.echo("{} {}".format(k.get_name(), k.get_base64()))
    finally:
        agent.close()

class AliasesGroup(click.Group):

    _aliases = {
        "pub": "pubkey",
    }

    def list_commands(self, ctx):
        cmds = [k for k in self.commands]
        aliases = [k for k in self._aliases]
        return sorted(cmds + aliases)

    def get_command(self, ctx, cmd_name):
        rv = click.Group.get_command(self, ctx, cmd_name)
        if rv is not None:
            return rv
        if cmd_name in self._aliases:
            return click.Group.get_command(self, ctx, self._aliases[cmd_name])
        return None


@click.option('-d', '--debug', 'verbose', is_flag=True,
              help='Print debug diagnostics to stderr')
@click.command(cls=AliasesGroup,
               context_settings=dict(help_option_names=['-h', '--help']))
def sshutil(verbose):
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
        debug.set_debug(logging.getLogger("sshutil"))

sshutil.add_command(pubkey)
sshutil.add_command(sign)
sshutil.add_command(agent_keys)


if __name__ == '__main__':
    sshutil()
