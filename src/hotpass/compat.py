# Use secure random source for secrets
from random import SystemRandom

random = SystemRandom()
