"""
Daruma Package
==============

Daruma Otoshi: steer a falling block through an endless lane of gapped
barriers. This package contains the level generator, collision model,
scene machine, scoring and the agent-facing environment.

All tunable parameters are in game_config.yaml.
"""
