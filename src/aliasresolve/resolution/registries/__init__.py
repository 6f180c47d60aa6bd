"""Name-registry resolvers (ENS, UD, CNS, BNS, ZNS, Namecoin, FIO)."""

from aliasresolve.resolution.registries.bns import BnsResolver
from aliasresolve.resolution.registries.cns import CardanoNameServiceResolver
from aliasresolve.resolution.registries.ens import EnsResolver
from aliasresolve.resolution.registries.fio import FioResolver
from aliasresolve.resolution.registries.namecoin import NamecoinResolver
from aliasresolve.resolution.registries.unstoppable import UnstoppableDomainsResolver
from aliasresolve.resolution.registries.zns import ZnsResolver

__all__ = [
    "BnsResolver",
    "CardanoNameServiceResolver",
    "EnsResolver",
    "FioResolver",
    "NamecoinResolver",
    "UnstoppableDomainsResolver",
    "ZnsResolver",
]
