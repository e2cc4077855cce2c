"""Serviços de enriquecimento, consulta e difusão do Socorro."""
