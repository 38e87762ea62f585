"""
Government data sync (Camara dos Deputados open data API).
"""

from pauta.sync.camara import CamaraAPIError, CamaraClient, sync_recent_propositions

__all__ = ['CamaraAPIError', 'CamaraClient', 'sync_recent_propositions']
