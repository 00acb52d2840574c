"""Sprout: a small module host for an aiogram bot."""
