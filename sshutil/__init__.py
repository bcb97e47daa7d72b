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


"""
SSH client credential helpers: private key loading, operator prompts and
SSH agent access.
"""

__version__ = "0.1.0"

from .debug import set_debug
from .errors import (SSHUtilError, KeyFileError, NoPemBlock, NoPasswordSupplied,
                     DecryptionFailed, UnsupportedKeyType,
                     MalformedKeyStructure, FileUnreadable)
from .keys import (KeyPair, key, encrypted_key, user_key, encrypted_user_key,
                   load)
from .prompt import Prompter, IOPrompter, io_prompt, STD_PROMPTER
from .agent import agent_with_socket, std_agent
