"""Combat maths for tabletop wargames: hit, wound and damage probability distributions."""
