"""
romvault-extras - MAME EXTRAs to RomVault dat converter

Reads the three Logiqx dat files shipped inside a MAME EXTRAs Zip archive
and merges them into a single dat file that RomVault can import, grouping
games into dir folders.
"""

__version__ = "0.3.0"
__author__ = "fragoulin"
