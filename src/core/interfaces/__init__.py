"""Contratos (Protocol) que implementan los adaptadores de backend."""
