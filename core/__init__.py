"""Dough formulation core modules"""
