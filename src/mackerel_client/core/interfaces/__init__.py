"""Interfaces/abstracciones del núcleo.

Por qué:
- Define contratos (Protocol) que implementan los transportes concretos.
- Los clientes de recursos dependen del contrato, no de httpx.
"""
