# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
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
Generation of webhook trigger secrets for build configs.
"""
import random
from typing import Optional


class SecretGenerator:
    """
    Produces 16 hex character secrets made of four 4-digit groups.

    The default source is ``random.Random``, which is not cryptographically
    secure. Webhook secrets only need to avoid accidental collisions; use
    :meth:`strong` where they must be unpredictable.
    """

    GROUPS = 4

    def __init__(self, random_source: Optional[random.Random] = None):
        """
        :param random_source: Any object with ``randrange``. Defaults to a
            freshly seeded ``random.Random``.
        """
        self.random_source = random_source or random.Random()

    @classmethod
    def strong(cls) -> "SecretGenerator":
        """
        Returns a generator backed by the operating system's random source.
        """
        return cls(random.SystemRandom())

    def _group(self) -> str:
        return format(self.random_source.randrange(0x10000), "04x")

    def generate(self) -> str:
        """
        Generates a new secret.

        :return: A 16 character lowercase hex string.
        """
        return "".join(self._group() for _ in range(self.GROUPS))
