from django.dispatch import Signal

# Sent after an NFT was minted, confirmed and stored.
# Provides: nft (MintedNftDTO), environment (str)
nft_minted = Signal()
