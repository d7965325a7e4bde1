import dash
import dash_leaflet as dl
import dash_leaflet.express as dlx
from dash import html, Output, Input, dash_table
import pandas as pd
import json
import logging
import webbrowser
from threading import Timer

from KDTree import build_kdtree
from PointSet import Point

logger = logging.getLogger(__name__)

CSV_PATH = 'Bares_e_CDB2025.csv'
GEOJSON_PATH = 'belo_horizonte.geojson'
MAP_CENTER = [-19.9191, -43.9386]
MAP_ZOOM = 12
APP_URL = "http://127.0.0.1:8050/"


def open_browser():
    webbrowser.open_new(APP_URL)


def parse_point(wkt):
    # wkt tem o formato "POINT (lon lat)"
    lon, lat = wkt.replace("POINT (", "").replace(")", "").split()
    return [float(lat), float(lon)]


def load_establishments(csv_path=CSV_PATH):
    # Lê o CSV e ajusta a leitura de latitude e longitude
    df = pd.read_csv(csv_path)
    df['coords'] = df['GEOMETRIA'].apply(parse_point)
    logger.info("Loaded %d establishments from %s", len(df), csv_path)
    return df


def index_establishments(df):
    # Constrói a KD-Tree sobre Point(lat, lon) e o mapa Point -> índice do DataFrame
    # Pontos com as mesmas coordenadas ficam associados à primeira linha

    lookup = {}
    for idx, (lat, lon) in df['coords'].items():
        lookup.setdefault(Point(lat, lon), idx)

    tree = build_kdtree(list(lookup))
    logger.info("Indexed %d distinct locations (tree height %d)", len(tree), tree.height())
    return tree, lookup


def display_name(row):
    nome = row.get('NOME_FANTASIA')
    if pd.notna(nome) and str(nome).strip():
        return nome
    return row['NOME']


def format_address(row):
    endereco = f"{row['NOME_LOGRADOURO']}, {row['NUMERO_IMOVEL']}"
    complemento = row.get('COMPLEMENTO')
    if pd.notna(complemento) and str(complemento).strip():
        endereco += f" – {complemento}"
    endereco += f" – {row['NOME_BAIRRO']}"
    return endereco


def nearest_establishment(tree, lookup, df, lat, lon):
    # Encaixa (lat, lon) no estabelecimento indexado mais próximo
    ponto = tree.nearest(lat, lon)
    row = df.loc[lookup[ponto]]
    return {
        "nome": display_name(row),
        "endereco": format_address(row),
        "lat": ponto.x,
        "lon": ponto.y,
        "distancia": Point.distance(ponto, Point(lat, lon)),
    }


def snap_click(tree, lookup, df, click_data):
    # Recebe o clickData do mapa e devolve o marcador (GeoJSON) e a linha da tabela
    if not click_data or "latlng" not in click_data:
        raise dash.exceptions.PreventUpdate

    lat = click_data["latlng"]["lat"]
    lon = click_data["latlng"]["lng"]
    found = nearest_establishment(tree, lookup, df, lat, lon)

    marker = {
        "lat": found["lat"],
        "lon": found["lon"],
        "popup": f"<b>{found['nome']}</b><br>{found['endereco']}",
        "tooltip": found["nome"]
    }
    return dlx.dicts_to_geojson([marker]), [found]


def build_app(df, tree, lookup, geojson):
    app = dash.Dash(__name__)

    children = [dl.TileLayer()]
    if geojson is not None:
        children += [
            # polígono de BH
            dl.GeoJSON(data=geojson,
                       style={"color": "blue", "weight": 2, "fillOpacity": 0.1}),
            # máscara para fora de BH
            dl.Polygon(
                positions=[
                    [[-90, -180], [-90, 180], [90, 180], [90, -180], [-90, -180]],
                    geojson['features'][0]['geometry']['coordinates'][0]
                ],
                color="black", fillColor="black", fillOpacity=0.7
            ),
        ]
    # Camada que recebe o marcador do estabelecimento mais próximo
    children.append(dl.GeoJSON(id="nearest-layer"))

    app.layout = html.Div([
        html.Label("Clique no mapa para encontrar o estabelecimento mais próximo:"),
        dl.Map(
            id="map",
            center=MAP_CENTER,
            zoom=MAP_ZOOM,
            style={'width': '100%', 'height': '500px'},
            children=children
        ),

        # Tabela com os dados do ponto encontrado
        dash_table.DataTable(
            id="table",
            columns=[
                {"name": "Nome", "id": "nome"},
                {"name": "Endereço", "id": "endereco"},
                {"name": "Latitude", "id": "lat"},
                {"name": "Longitude", "id": "lon"},
                {"name": "Distância (graus)", "id": "distancia"}
            ],
            data=[],      # será preenchido pelo callback
            style_cell={'textAlign': 'left', 'padding': '4px'},
            style_header={'fontWeight': 'bold'}
        )
    ], style={'width': '80%', 'margin': '0 auto'})

    # Callback que encaixa o clique no ponto mais próximo da KD-Tree
    @app.callback(
        Output("nearest-layer", "data"),
        Output("table", "data"),
        Input("map", "clickData")
    )
    def on_map_click(click_data):
        return snap_click(tree, lookup, df, click_data)

    return app


def main():
    logging.basicConfig(level=logging.INFO)

    # Carregar o GeoJSON real do polígono de Belo Horizonte
    with open(GEOJSON_PATH, 'r', encoding='utf-8') as f:
        bh_geojson = json.load(f)

    df = load_establishments(CSV_PATH)
    tree, lookup = index_establishments(df)

    app = build_app(df, tree, lookup, bh_geojson)

    # Abre o browser e roda
    Timer(1, open_browser).start()
    app.run(debug=False)


if __name__ == '__main__':
    main()
