import uuid


class TestCurrencyAssetsAPI:
    async def test_empty(self, client):
        res = await client.get("/user-currency-assets")

        assert res.status_code == 200
        assert res.json() == {"userCurrencyAssets": [], "userCurrencyAssetsSummary": []}

    async def test_add_and_list(self, client):
        res = await client.post(
            "/user-currency-assets",
            json=[
                {"currency": "ETH", "balance": "1.5", "walletAddress": "0xabc", "description": "paper"},
                {"currency": "ETH", "balance": "0.5"},
                {"currency": "XYZ", "balance": 10},
            ],
        )
        assert res.status_code == 200

        data = (await client.get("/user-currency-assets")).json()
        assert len(data["userCurrencyAssets"]) == 3
        paper = next(a for a in data["userCurrencyAssets"] if a["description"] == "paper")
        assert paper["blockChainExplorerUrl"] == "https://etherscan.io/address/0xabc"
        assert paper["balance"] == "1.5"
        assert paper["valueInOtherCurrency"] == {"USD": "150"}
        assert data["userCurrencyAssetsSummary"] == [
            {
                "currency": "ETH",
                "balance": "2",
                "valueInOtherCurrency": {"USD": "200"},
                "priceInOtherCurrency": {"USD": "100"},
            },
            {
                "currency": "XYZ",
                "balance": "10",
                "valueInOtherCurrency": {"USD": None},
                "priceInOtherCurrency": {"USD": None},
            },
        ]

    async def test_get_update_delete(self, client):
        await client.post("/user-currency-assets", json=[{"currency": "ETH", "balance": "1"}])
        [asset] = (await client.get("/user-currency-assets")).json()["userCurrencyAssets"]
        assert asset["blockChainExplorerUrl"] is None

        res = await client.get(f"/user-currency-assets/{asset['id']}")
        assert res.status_code == 200
        assert res.json()["currency"] == "ETH"

        res = await client.put(
            f"/user-currency-assets/{asset['id']}",
            json={"currency": "BTC", "balance": "0.25", "walletAddress": "1abc"},
        )
        assert res.status_code == 200
        assert res.json()["valueInOtherCurrency"] == {"USD": "5000"}
        assert res.json()["blockChainExplorerUrl"] == "https://blockchain.info/address/1abc"

        assert (await client.delete(f"/user-currency-assets/{asset['id']}")).status_code == 200
        assert (await client.get(f"/user-currency-assets/{asset['id']}")).status_code == 404

    async def test_missing_asset(self, client):
        missing = uuid.uuid4()

        assert (await client.get(f"/user-currency-assets/{missing}")).status_code == 404
        assert (await client.delete(f"/user-currency-assets/{missing}")).status_code == 404
        res = await client.put(f"/user-currency-assets/{missing}", json={"currency": "ETH", "balance": "1"})
        assert res.status_code == 404

    async def test_balance_is_required(self, client):
        res = await client.post("/user-currency-assets", json=[{"currency": "ETH"}])

        assert res.status_code == 422


class TestSampleCurrencyAssetsAPI:
    async def test_sample_assets(self, client):
        res = await client.get("/user-currency-assets/sample")

        assert res.status_code == 200
        data = res.json()
        assert [a["currency"] for a in data["userCurrencyAssets"]] == ["BTC", "BTC", "ETH"]
        from_binance = data["userCurrencyAssets"][0]
        assert from_binance["valueInOtherCurrency"] == {"USD": "9800"}
        assert from_binance["blockChainExplorerUrl"] is not None
        assert data["userCurrencyAssetsSummary"][0] == {
            "currency": "BTC",
            "balance": "0.647",
            "valueInOtherCurrency": {"USD": "12940"},
            "priceInOtherCurrency": {"USD": "20000"},
        }
