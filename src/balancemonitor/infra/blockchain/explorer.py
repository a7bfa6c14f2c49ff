EXPLORER_URL_TEMPLATES: dict[str, str] = {
    "BTC": "https://blockchain.info/address/{address}",
    "LTC": "https://live.blockcypher.com/ltc/address/{address}",
    "DOGE": "https://dogechain.info/address/{address}",
    "BCH": "https://blockchair.com/bitcoin-cash/address/{address}",
    "ETH": "https://etherscan.io/address/{address}",
    "XRP": "https://xrpcharts.ripple.com/address/{address}",
    "ZEC": "https://explorer.zcha.in/address/{address}",
    "XMR": "https://moneroblocks.info/address/{address}",
    "DASH": "https://explorer.dash.org/address/{address}",
    "EOS": "https://eosweb.net/account/{address}",
    "BCN": "https://explorer.bcn.cash/account/{address}",
    "XLM": "https://xlmcharts.com/account/{address}",
    "TRX": "https://trx.network/address/{address}",
    "NEO": "https://neoexplorer.io/address/{address}",
    "ONT": "https://explorer.ont.io/address/{address}",
    "ZIL": "https://explorer.zilliqa.com/address/{address}",
    "KCS": "https://explorer.kcs.io/address/{address}",
    "ZRX": "https://etherscan.io/address/{address}",  # ERC-20
    "BTS": "https://bts.bitnet.io/address/{address}",
    "DGB": "https://digiexplorer.info/address/{address}",
    "XVG": "https://explorer.xvg.io/address/{address}",
}


def get_blockchain_explorer_url(currency: str, wallet_address: str | None) -> str | None:
    """Link to the address page of a public block explorer, if one is known for the currency."""
    if not wallet_address:
        return None
    template = EXPLORER_URL_TEMPLATES.get(currency)
    if template is None:
        return None
    return template.format(address=wallet_address)
