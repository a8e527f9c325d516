"""Reusable building blocks shared by agent front ends."""
