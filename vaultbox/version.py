"""Vaultbox Meta information.
   Vaultbox keeps named collections of secrets in encrypted files on disk.
"""
__title__ = 'vaultbox'
__description__ = (
   'Vaultbox keeps named collections of string secrets '
   'in authenticated-encrypted files on disk.'
)
__version__ = '0.1.0'
__copyright__ = 'Copyright (c) 2023 Jesus Lara'
__author__ = 'Jesus Lara'
__author_email__ = 'jesuslarag@gmail.com'
__license__ = 'Apache-2.0'
__url__ = 'https://github.com/phenobarbital/vaultbox'
