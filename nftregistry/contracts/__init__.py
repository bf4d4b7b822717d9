from nftregistry.contracts.registry import AssetRegistry
from nftregistry import config

# Contract type stored under __type__ -> class that implements it
CONTRACT_TYPES = {
    config.REGISTRY_TYPE: AssetRegistry
}
